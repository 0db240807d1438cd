#!/usr/bin/env python3
"""main.py — CLI entry point for the darkroom stock library.

Usage:
    python main.py <command> [options]

Commands:
    stylize   - Render one photo on a stock
    batch     - Render every photo in a directory on a stock
    stocks    - List the available stocks
    api       - Start the FastAPI stylize server
    help      - Show this help message

Examples:
    python main.py stylize photo.jpg out.jpg --stock polaroid-1
    python main.py stylize photo.jpg out.jpg --stock vhs-worn --seed 7
    python main.py batch --input photos/ --output stylized/ --stock aged-gazette
    python main.py stocks
    python main.py api --port 8080
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def cmd_stylize(args: argparse.Namespace) -> int:
    """Render a single file."""
    from darkroom import Stock, apply_filter
    from darkroom.codec import load
    from darkroom.exceptions import StylizeError

    src = Path(args.input)
    dst = Path(args.output)
    try:
        stock = Stock.parse(args.stock)
        data  = apply_filter(load(src), stock, seed=args.seed)
    except StylizeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_bytes(data)
    print(f"Saved {stock.value} render to {dst}")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Render every image in the input directory."""
    from darkroom import Stock, apply_filter
    from darkroom.codec import load
    from darkroom.exceptions import StylizeError, UnsupportedPresetError
    from darkroom.paths import Paths, iter_images

    try:
        stock = Stock.parse(args.stock)
    except UnsupportedPresetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    Paths.configure(input_dir=args.input, output_dir=args.output)
    paths = Paths.get_config()

    if not paths.input_dir.is_dir():
        print(f"Error: input directory not found: {paths.input_dir}", file=sys.stderr)
        return 1

    sources = iter_images(paths.input_dir)
    total   = len(sources)
    print(f"Found {total} images under {paths.input_dir}\n")

    created = 0
    errors  = 0
    for idx, src in enumerate(sources, 1):
        dst = Paths.output_path_for(src, stock.value)
        print(f"  [{idx:>4}/{total}] {src.name}")
        try:
            data = apply_filter(
                load(src), stock,
                seed=None if args.seed is None else args.seed + idx,
            )
        except StylizeError as exc:
            errors += 1
            print(f"  [ERROR] {src.name}: {exc}")
            continue
        if not args.dry_run:
            dst.parent.mkdir(parents=True, exist_ok=True)
            dst.write_bytes(data)
        created += 1

    print(f"\n{'=' * 60}")
    print(f"  Inputs   : {total}")
    print(f"  Rendered : {created}")
    print(f"  Errors   : {errors}")
    if args.dry_run:
        print("  [DRY RUN -- no files written]")
    else:
        print(f"  Output   : {paths.output_dir}")
    print(f"{'=' * 60}")
    return 1 if errors else 0


def cmd_stocks(args: argparse.Namespace) -> int:
    """Print the stock catalogue."""
    from darkroom import STOCK_INFO, Stock

    for stock in Stock:
        name, desc = STOCK_INFO[stock]
        print(f"  {stock.value:<14} {name:<18} {desc}")
    return 0


def cmd_api(args: argparse.Namespace) -> int:
    """Start the FastAPI stylize server."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        return 1

    print(f"Starting API server at http://{args.host}:{args.port}")
    uvicorn.run(
        "api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Darkroom analog stock CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py stylize photo.jpg out.jpg --stock polaroid-1
  python main.py batch --input photos/ --output stylized/ --stock thermal
  python main.py stocks
  python main.py api --reload
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every pipeline stage"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # stylize subcommand
    stylize_parser = subparsers.add_parser("stylize", help="Render one photo on a stock")
    stylize_parser.add_argument("input", metavar="INPUT", help="Source image file")
    stylize_parser.add_argument("output", metavar="OUTPUT", help="Destination JPEG")
    stylize_parser.add_argument(
        "--stock", "-s", default="aged-gazette", metavar="ID", help="Stock id (see 'stocks')"
    )
    stylize_parser.add_argument(
        "--seed", type=int, default=None, metavar="N", help="Seed for reproducible grain"
    )

    # batch subcommand
    batch_parser = subparsers.add_parser(
        "batch", help="Render every photo in a directory"
    )
    batch_parser.add_argument(
        "--input", default=None, metavar="DIR", help="Directory of source photos (default: ./input)"
    )
    batch_parser.add_argument(
        "--output", default=None, metavar="DIR", help="Output directory (default: ./output)"
    )
    batch_parser.add_argument(
        "--stock", "-s", default="aged-gazette", metavar="ID", help="Stock id (see 'stocks')"
    )
    batch_parser.add_argument(
        "--seed", type=int, default=None, metavar="N", help="Base seed; file N uses seed+N"
    )
    batch_parser.add_argument(
        "--dry-run", action="store_true", help="Render without writing files"
    )

    # stocks subcommand
    subparsers.add_parser("stocks", help="List the available stocks")

    # api subcommand
    api_parser = subparsers.add_parser("api", help="Start the FastAPI stylize server")
    api_parser.add_argument(
        "--host",
        default=os.environ.get("HOST", "127.0.0.1"),
        metavar="ADDR",
        help="Bind address (default: 127.0.0.1)",
    )
    api_parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", 8000)),
        metavar="PORT",
        help="Port (default: 8000)",
    )
    api_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # help subcommand
    subparsers.add_parser("help", help="Show this help message")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from darkroom.logging import set_verbose

    set_verbose(args.verbose)

    commands = {
        "stylize": cmd_stylize,
        "batch": cmd_batch,
        "stocks": cmd_stocks,
        "api": cmd_api,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
