"""
Working-directory path configuration for batch rendering.

Uses a class-based approach so the CLI can override the input/output
directories while tests inject their own.

Usage:
    # Default paths (read-only)
    from darkroom.paths import Paths

    input_dir = Paths.input_dir()
    output_dir = Paths.output_dir()

    # Custom paths (for testing or alternative configurations)
    Paths.configure(input_dir="/photos", output_dir="/photos/stylized")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

IMAGE_SUFFIXES: frozenset[str] = frozenset({
    ".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff", ".gif",
})


@dataclass(frozen=True, slots=True)
class PathConfig:
    """Immutable path configuration."""

    base_dir: Path
    input_dir: Path
    output_dir: Path


class Paths:
    """
    Path configuration manager.

    Defaults are ``./input`` and ``./output`` under the current working
    directory, resolved at call time, with ``configure``/``reset`` overrides.
    """

    _input_dir: Path | None = None
    _output_dir: Path | None = None

    @classmethod
    def configure(
        cls, input_dir: Path | str | None = None, output_dir: Path | str | None = None
    ) -> None:
        """
        Configure custom paths.

        Args:
            input_dir: Directory scanned for source photos
            output_dir: Directory the rendered JPEGs are written to
        """
        if input_dir is not None:
            cls._input_dir = Path(input_dir).resolve()
        if output_dir is not None:
            cls._output_dir = Path(output_dir).resolve()

    @classmethod
    def reset(cls) -> None:
        """Reset to default paths."""
        cls._input_dir = None
        cls._output_dir = None

    @classmethod
    def base_dir(cls) -> Path:
        return Path.cwd()

    @classmethod
    def input_dir(cls) -> Path:
        if cls._input_dir is not None:
            return cls._input_dir
        return cls.base_dir() / "input"

    @classmethod
    def output_dir(cls) -> Path:
        if cls._output_dir is not None:
            return cls._output_dir
        return cls.base_dir() / "output"

    @classmethod
    def get_config(cls) -> PathConfig:
        """Get current path configuration as an immutable dataclass."""
        return PathConfig(
            base_dir=cls.base_dir(),
            input_dir=cls.input_dir(),
            output_dir=cls.output_dir(),
        )

    @classmethod
    def output_path_for(cls, source: Path, stock: str) -> Path:
        """``<output>/<stem>_<stock>.jpg`` for a source photo."""
        return cls.output_dir() / f"{source.stem}_{stock}.jpg"


def iter_images(directory: Path) -> list[Path]:
    """Sorted image files directly under *directory*."""
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
    )
