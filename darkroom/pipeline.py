"""
pipeline.py
--------------------
Stock pipeline: picks the transforms and overlays for a stock and runs them
in a fixed order.

Stage order (physical reproduction first, presentation last):
  pixel kernel / multi-pass effect → vignette → instant-film softness
  → scratches → tape/video overlays → instant-film frame → encode

Randomness is injected: every stochastic stage draws from one numpy
Generator, so the same seed and input always give the same output.
"""

from __future__ import annotations

import time

import numpy as np

from . import codec
from .buffer import ImageBuffer
from .constants import (
    HEAVY_VIGNETTE_STOCKS,
    JPEG_QUALITY,
    NO_VIGNETTE_STOCKS,
    SCRATCHY_STOCKS,
    VIGNETTE_DEFAULT,
    VIGNETTE_HEAVY,
    VIGNETTE_INSTANT,
    Stock,
)
from .exceptions import RenderError
from .frame import compose_frame
from .kernels import KERNELS
from .logging import get_logger
from .multipass import MULTIPASS
from .overlays import date_stamp, instant_softness, scratches, tracking_noise, vignette

logger = get_logger()


def make_rng(
    rng: "np.random.Generator | None" = None, seed: int | None = None
) -> np.random.Generator:
    """Resolve the random source: explicit generator, else seeded, else fresh."""
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def _transform(buffer: ImageBuffer, stock: Stock, rng: np.random.Generator) -> None:
    """Run the colour stage in place on *buffer*."""
    if stock in KERNELS:
        logger.debug("kernel %s", stock.value)
        buffer.pixels[..., :3] = KERNELS[stock](buffer.rgb, rng)
    elif stock in MULTIPASS:
        logger.debug("multi-pass %s", stock.value)
        snapshot = buffer.rgb.copy()
        MULTIPASS[stock](snapshot, buffer.rgb)


def _overlay(surface: np.ndarray, stock: Stock, rng: np.random.Generator) -> np.ndarray:
    """Run the surface stages in their fixed order."""
    if stock not in NO_VIGNETTE_STOCKS:
        intensity = VIGNETTE_HEAVY if stock in HEAVY_VIGNETTE_STOCKS else VIGNETTE_DEFAULT
        surface = vignette(surface, intensity)

    if stock.is_instant_film:
        surface = vignette(surface, VIGNETTE_INSTANT)
        surface = instant_softness(surface, stock)

    if stock in SCRATCHY_STOCKS:
        surface = scratches(surface, rng, extreme=stock is Stock.THERMAL)

    if stock is Stock.VHS_WORN:
        surface = tracking_noise(surface, rng)
    elif stock is Stock.DV_CAM:
        surface = date_stamp(surface, rng)

    if stock.is_instant_film:
        surface = compose_frame(surface, stock, rng)
    return surface


def apply_stock(
    buffer: ImageBuffer,
    stock: "Stock | str",
    *,
    rng: "np.random.Generator | None" = None,
    seed: int | None = None,
) -> ImageBuffer:
    """Reproduce *buffer* on *stock* and return the rendered surface.

    The input buffer is left untouched; the pipeline works on its own copy.
    Instant-film stocks return a larger, framed surface.

    Raises:
        UnsupportedPresetError: *stock* is not a known stock id.
        RenderError: a surface could not be allocated or composited.
    """
    stock = Stock.parse(stock)
    rng   = make_rng(rng, seed)
    start = time.perf_counter()

    try:
        work = buffer.copy()
        _transform(work, stock, rng)
        surface = _overlay(work.pixels, stock, rng)
    except MemoryError as exc:
        raise RenderError(
            f"Out of memory rendering {buffer.width}x{buffer.height} on {stock.value}"
        ) from exc

    H, W = surface.shape[:2]
    logger.debug(
        "%s: %dx%d -> %dx%d in %.1f ms",
        stock.value, buffer.width, buffer.height, W, H,
        (time.perf_counter() - start) * 1000,
    )
    return ImageBuffer(width=W, height=H, pixels=surface)


def apply_filter(
    image: "bytes | ImageBuffer",
    stock: "Stock | str",
    *,
    rng: "np.random.Generator | None" = None,
    seed: int | None = None,
    quality: float = JPEG_QUALITY,
) -> bytes:
    """Decode *image*, reproduce it on *stock* and return JPEG bytes.

    Raises:
        UnsupportedPresetError: unknown stock (checked before decoding).
        DecodeError: *image* bytes are not a readable image.
        RenderError: a compositing step could not complete.
    """
    stock  = Stock.parse(stock)
    buffer = image if isinstance(image, ImageBuffer) else codec.decode(image)
    result = apply_stock(buffer, stock, rng=rng, seed=seed)
    data   = codec.encode(result, quality)
    logger.info(
        "rendered %s (%dx%d, %d bytes)", stock.value, result.width, result.height, len(data)
    )
    return data
