"""Tests for darkroom/frame module."""

from __future__ import annotations

import numpy as np
import pytest

import darkroom.frame as frame
from darkroom.constants import FRAME_STYLES, Stock
from darkroom.exceptions import RenderError
from darkroom.frame import FrameGeometry, compose_frame


def _photo(h: int, w: int, seed: int = 0) -> np.ndarray:
    gen = np.random.default_rng(seed)
    arr = gen.integers(0, 256, (h, w, 4), dtype=np.uint8)
    arr[..., 3] = 255
    return arr


class TestFrameGeometry:
    """Border sizes follow the short side of the photo."""

    def test_square_photo(self) -> None:
        geo = FrameGeometry.for_photo(100, 100)
        assert (geo.border, geo.bottom) == (8, 35)
        assert (geo.frame_width, geo.frame_height) == (116, 143)

    def test_landscape_photo(self) -> None:
        geo = FrameGeometry.for_photo(200, 100)
        assert (geo.frame_width, geo.frame_height) == (216, 143)

    def test_tiny_photo_has_no_border(self) -> None:
        geo = FrameGeometry.for_photo(2, 2)
        assert (geo.frame_width, geo.frame_height) == (2, 2)


class TestComposeFrame:
    """Frame compositing."""

    def test_output_size(self, rng: np.random.Generator) -> None:
        out = compose_frame(_photo(100, 100), Stock.POLAROID_1, rng)
        assert out.shape == (143, 116, 4)
        assert (out[..., 3] == 255).all()

    def test_photo_interior_is_preserved(self, rng: np.random.Generator) -> None:
        photo = _photo(100, 100)
        out   = compose_frame(photo, Stock.POLAROID_3, rng)
        # skip the 2-px ridge around the opening
        np.testing.assert_array_equal(out[8 + 3:108 - 3, 8 + 3:108 - 3], photo[3:-3, 3:-3])

    def test_bottom_strip_is_paper(self, rng: np.random.Generator) -> None:
        out   = compose_frame(_photo(100, 100), Stock.POLAROID_1, rng)
        paper = np.array(FRAME_STYLES[Stock.POLAROID_1].paper)
        strip = out[128:, :, :3].astype(int)
        assert np.abs(strip - paper).max() <= 1

    def test_photo_not_modified(self, rng: np.random.Generator) -> None:
        photo  = _photo(40, 30)
        before = photo.copy()
        compose_frame(photo, Stock.POLAROID_2, rng)
        np.testing.assert_array_equal(photo, before)

    def test_stock_without_frame(self, rng: np.random.Generator) -> None:
        with pytest.raises(RenderError):
            compose_frame(_photo(10, 10), Stock.BLUEPRINT, rng)

    def test_allocation_failure_propagates(self, monkeypatch, rng: np.random.Generator) -> None:
        def fail(*args, **kwargs):
            raise RenderError("out of memory")

        monkeypatch.setattr(frame, "allocate", fail)
        with pytest.raises(RenderError):
            compose_frame(_photo(10, 10), Stock.POLAROID_1, rng)
