"""
buffer.py
--------------------
In-memory RGBA pixel grid passed between pipeline stages.

The pixel store is a numpy uint8 array of shape (height, width, 4).  A buffer
is owned by the pipeline call that created it; stages either mutate it in
place or replace ``pixels`` with a new array of the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np


@dataclass(slots=True)
class ImageBuffer:
    """RGBA8 pixel grid of ``width`` x ``height``."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        if self.pixels.shape != (self.height, self.width, 4):
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {self.pixels.dtype}")

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "ImageBuffer":
        """Wrap an (H, W, 3) or (H, W, 4) uint8 array; RGB gets an opaque alpha."""
        arr = np.asarray(arr, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected (H, W, 3|4) array, got {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        H, W = arr.shape[:2]
        return cls(width=W, height=H, pixels=np.ascontiguousarray(arr))

    @classmethod
    def from_pixels(
        cls, width: int, height: int, pixels: Iterable[Sequence[int]]
    ) -> "ImageBuffer":
        """Build from a flat row-major sequence of ``width*height`` RGBA tuples."""
        flat = np.asarray(list(pixels), dtype=np.int64)
        if flat.shape != (width * height, 4):
            raise ValueError(
                f"Expected {width * height} RGBA tuples, got array of shape {flat.shape}"
            )
        arr = np.clip(flat, 0, 255).astype(np.uint8).reshape(height, width, 4)
        return cls(width=width, height=height, pixels=arr)

    @classmethod
    def blank(
        cls, width: int, height: int, color: tuple[int, int, int] = (0, 0, 0)
    ) -> "ImageBuffer":
        """Opaque buffer filled with *color*."""
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[..., :3] = color
        arr[..., 3] = 255
        return cls(width=width, height=height, pixels=arr)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def rgb(self) -> np.ndarray:
        """View of the colour channels (H, W, 3)."""
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def copy(self) -> "ImageBuffer":
        """Independent snapshot of this buffer."""
        return ImageBuffer(self.width, self.height, self.pixels.copy())

    def to_pixels(self) -> list[tuple[int, int, int, int]]:
        """Flat row-major list of RGBA tuples."""
        return [tuple(int(v) for v in px) for px in self.pixels.reshape(-1, 4)]
