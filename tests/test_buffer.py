"""Tests for darkroom/buffer module."""

from __future__ import annotations

import numpy as np
import pytest

from darkroom.buffer import ImageBuffer


class TestImageBuffer:
    """Test cases for the ImageBuffer data model."""

    def test_shape_must_match_size(self) -> None:
        with pytest.raises(ValueError):
            ImageBuffer(width=3, height=2, pixels=np.zeros((3, 2, 4), dtype=np.uint8))

    def test_dtype_must_be_uint8(self) -> None:
        with pytest.raises(ValueError):
            ImageBuffer(width=2, height=2, pixels=np.zeros((2, 2, 4), dtype=np.float32))

    def test_from_array_adds_opaque_alpha(self) -> None:
        buf = ImageBuffer.from_array(np.zeros((2, 3, 3), dtype=np.uint8))
        assert buf.size == (3, 2)
        assert (buf.alpha == 255).all()

    def test_from_pixels_round_trips_tuples(self) -> None:
        pixels = [(1, 2, 3, 255), (4, 5, 6, 255), (7, 8, 9, 128), (10, 11, 12, 0)]
        buf = ImageBuffer.from_pixels(2, 2, pixels)
        assert buf.pixels[1, 0].tolist() == [7, 8, 9, 128]
        assert buf.to_pixels() == pixels

    def test_from_pixels_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError):
            ImageBuffer.from_pixels(2, 2, [(0, 0, 0, 255)] * 3)

    def test_copy_is_independent(self) -> None:
        buf  = ImageBuffer.blank(2, 2, (10, 20, 30))
        snap = buf.copy()
        buf.pixels[0, 0, 0] = 99
        assert snap.pixels[0, 0, 0] == 10
