"""Tests for darkroom/codec module."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from darkroom import codec
from darkroom.buffer import ImageBuffer
from darkroom.exceptions import DecodeError


class TestDecode:
    """Decoding encoded bytes."""

    def test_png_to_rgba(self, png_bytes: bytes) -> None:
        buf = codec.decode(png_bytes)
        assert buf.size == (32, 20)
        assert (buf.alpha == 255).all()
        assert buf.pixels[0, 0, 1] == 128

    def test_grayscale_is_expanded(self) -> None:
        out = io.BytesIO()
        Image.new("L", (5, 3), 77).save(out, format="PNG")
        buf = codec.decode(out.getvalue())
        assert buf.pixels[1, 1].tolist() == [77, 77, 77, 255]

    def test_transparency_is_kept(self) -> None:
        out = io.BytesIO()
        Image.new("RGBA", (4, 4), (10, 20, 30, 0)).save(out, format="PNG")
        buf = codec.decode(out.getvalue())
        assert (buf.alpha == 0).all()

    @pytest.mark.parametrize("data", [b"", b"garbage", b"\x00" * 64])
    def test_bad_input(self, data: bytes) -> None:
        with pytest.raises(DecodeError):
            codec.decode(data)


class TestEncode:
    """JPEG output."""

    def test_jpeg_round_trip_dimensions(self) -> None:
        buf  = ImageBuffer.blank(30, 10, (200, 100, 50))
        data = codec.encode(buf)
        assert data[:2] == b"\xff\xd8"
        with Image.open(io.BytesIO(data)) as im:
            assert im.size == (30, 10)
            assert im.mode == "RGB"

    def test_transparent_flattens_to_black(self) -> None:
        buf = ImageBuffer(width=8, height=8, pixels=np.zeros((8, 8, 4), dtype=np.uint8))
        with Image.open(io.BytesIO(codec.encode(buf))) as im:
            assert max(im.getextrema()[0]) <= 2

    def test_quality_range(self) -> None:
        buf = ImageBuffer.blank(2, 2, (0, 0, 0))
        with pytest.raises(ValueError):
            codec.encode(buf, quality=0.0)
        with pytest.raises(ValueError):
            codec.encode(buf, quality=1.5)

    def test_lower_quality_is_smaller(self, make_buffer) -> None:
        buf = make_buffer(64, 64, seed=9)
        assert len(codec.encode(buf, 0.3)) < len(codec.encode(buf, 0.95))


class TestLoad:
    """Reading files."""

    def test_load_file(self, tmp_path, png_bytes: bytes) -> None:
        path = tmp_path / "photo.png"
        path.write_bytes(png_bytes)
        assert codec.load(path).size == (32, 20)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(DecodeError):
            codec.load(tmp_path / "missing.png")
