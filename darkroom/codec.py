"""
codec.py
--------------------
Decode/encode boundary backed by Pillow.

decode() turns encoded bytes into an RGBA ImageBuffer; encode() writes a
buffer out as JPEG.  Quality is given on the 0-1 scale used by the rest of
the library and mapped to Pillow's 1-95 range.
"""

from __future__ import annotations

import io

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .buffer import ImageBuffer
from .constants import JPEG_QUALITY
from .exceptions import DecodeError, RenderError


def decode(data: bytes) -> ImageBuffer:
    """Decode encoded image bytes into an RGBA ImageBuffer.

    EXIF orientation is applied so the buffer matches what a viewer shows.

    Raises:
        DecodeError: empty, truncated or unrecognised input.
    """
    if not data:
        raise DecodeError("Empty image data")
    try:
        with Image.open(io.BytesIO(data)) as im:
            im.load()
            im = ImageOps.exif_transpose(im)
            arr = np.array(im.convert("RGBA"))
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Could not decode image: {exc}") from exc
    return ImageBuffer.from_array(arr)


def _pillow_quality(quality: float) -> int:
    return max(1, min(95, int(round(quality * 100))))


def encode(buffer: ImageBuffer, quality: float = JPEG_QUALITY) -> bytes:
    """Encode *buffer* as JPEG bytes; transparent areas are flattened onto black."""
    if not 0.0 < quality <= 1.0:
        raise ValueError(f"Quality must be in (0, 1], got {quality}")
    rgba   = Image.fromarray(buffer.pixels)
    canvas = Image.new("RGB", rgba.size, (0, 0, 0))
    canvas.paste(rgba, mask=rgba.getchannel("A"))

    buf = io.BytesIO()
    try:
        canvas.save(buf, format="JPEG", quality=_pillow_quality(quality))
    except OSError as exc:
        raise RenderError(f"Could not encode JPEG: {exc}") from exc
    return buf.getvalue()


def load(path) -> ImageBuffer:
    """Read and decode an image file."""
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise DecodeError(f"Could not read {path}: {exc}") from exc
    return decode(data)
