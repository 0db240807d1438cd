"""Pytest configuration and shared fixtures for the darkroom stock library."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

# Make the repo root importable when running from a source checkout
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from darkroom.buffer import ImageBuffer  # noqa: E402


@pytest.fixture
def rng() -> np.random.Generator:
    """Fixed-seed random source."""
    return np.random.default_rng(1234)


@pytest.fixture
def random_rgb(rng: np.random.Generator) -> np.ndarray:
    """Random 16x24 uint8 RGB array."""
    return rng.integers(0, 256, (16, 24, 3), dtype=np.uint8)


@pytest.fixture
def make_buffer() -> Callable[..., ImageBuffer]:
    """Factory for solid-colour or random ImageBuffers."""

    def _make(
        width: int,
        height: int,
        color: tuple[int, int, int] | None = None,
        seed: int = 0,
    ) -> ImageBuffer:
        if color is not None:
            return ImageBuffer.blank(width, height, color)
        gen = np.random.default_rng(seed)
        arr = gen.integers(0, 256, (height, width, 4), dtype=np.uint8)
        return ImageBuffer(width=width, height=height, pixels=arr)

    return _make


@pytest.fixture
def png_bytes() -> bytes:
    """A 32x20 gradient PNG."""
    xs  = np.linspace(0, 255, 32, dtype=np.float32)
    arr = np.zeros((20, 32, 3), dtype=np.uint8)
    arr[..., 0] = xs.astype(np.uint8)
    arr[..., 1] = 128
    arr[..., 2] = xs[::-1].astype(np.uint8)
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()
