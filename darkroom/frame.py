"""
frame.py
--------------------
Instant-film frame compositor.

Builds a new, larger surface: aged paper border (thick bottom strip), a soft
inset shadow, the processed photo, and a cut-paper ridge around the opening.
The processed photo surface is read only; a fresh canvas is always returned.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw

from .compositing import CompositeOp, Shadow, allocate, composite
from .constants import (
    FRAME_BORDER_RATIO,
    FRAME_BOTTOM_RATIO,
    FRAME_SHADOW_OFFSET,
    FRAME_SHADOW_OPACITY,
    FRAME_STYLES,
    RIDGE_DARK_OPACITY,
    RIDGE_LIGHT_OPACITY,
    RIDGE_WIDTH,
    Stock,
)
from .exceptions import RenderError
from .logging import get_logger
from .overlays import paper_texture
from .utils import _rng

logger = get_logger()


@dataclass(frozen=True, slots=True)
class FrameGeometry:
    """Border sizes and outer canvas size for a ``width`` x ``height`` photo."""

    width: int
    height: int
    border: int
    bottom: int

    @classmethod
    def for_photo(cls, width: int, height: int) -> "FrameGeometry":
        short = min(width, height)
        return cls(
            width=width,
            height=height,
            border=int(np.floor(short * FRAME_BORDER_RATIO)),
            bottom=int(np.floor(short * FRAME_BOTTOM_RATIO)),
        )

    @property
    def frame_width(self) -> int:
        return self.width + 2 * self.border

    @property
    def frame_height(self) -> int:
        return self.height + self.border + self.bottom


def _ridge(geo: FrameGeometry, points: list[tuple[int, int]]) -> np.ndarray:
    """Coverage map of a 2-px polyline stroked on the frame canvas."""
    mask = Image.new("L", (geo.frame_width, geo.frame_height), 0)
    ImageDraw.Draw(mask).line(points, fill=255, width=RIDGE_WIDTH, joint="curve")
    return np.asarray(mask, dtype=np.float32) / 255.0


def compose_frame(
    photo: np.ndarray,
    stock: Stock,
    rng: "np.random.Generator | None" = None,
) -> np.ndarray:
    """Embed an RGBA *photo* (H, W, 4) in an instant-film frame for *stock*.

    Returns:
        New RGBA uint8 surface of ``FrameGeometry.frame_height`` x ``frame_width``.

    Raises:
        RenderError: the stock has no frame style, or the canvas could not be
            allocated.  The unframed photo is never returned in its place.
    """
    style = FRAME_STYLES.get(stock)
    if style is None:
        raise RenderError(f"Stock {stock.value!r} has no instant-film frame")

    H, W = photo.shape[:2]
    geo  = FrameGeometry.for_photo(W, H)
    b    = geo.border

    canvas = allocate(geo.frame_height, geo.frame_width)
    canvas[..., :3] = style.paper
    canvas[..., 3]  = 255
    canvas = paper_texture(canvas, style.grain, _rng(rng))

    # Inset shadow: an opaque black rect at the photo position casting a soft shadow
    opening = np.zeros(canvas.shape[:2], dtype=np.float32)
    opening[b:b + H, b:b + W] = 1.0
    shadow = Shadow(
        color=(0, 0, 0),
        opacity=FRAME_SHADOW_OPACITY,
        blur=b / 2,
        offset=FRAME_SHADOW_OFFSET,
    )
    canvas = composite(canvas, (0, 0, 0), opening, CompositeOp(shadow=shadow))

    # Photo
    canvas[b:b + H, b:b + W] = composite(
        canvas[b:b + H, b:b + W],
        photo[..., :3],
        photo[..., 3].astype(np.float32) / 255.0,
    )

    # Ridge: light along left/top, dark along bottom/right
    light = _ridge(geo, [(b, b + H), (b, b), (b + W, b)])
    canvas = composite(canvas, (255, 255, 255), light, CompositeOp(opacity=RIDGE_LIGHT_OPACITY))
    dark = _ridge(geo, [(b, b + H), (b + W, b + H), (b + W, b)])
    canvas = composite(canvas, (0, 0, 0), dark, CompositeOp(opacity=RIDGE_DARK_OPACITY))

    logger.debug(
        "framed %dx%d photo into %dx%d (%s)",
        W, H, geo.frame_width, geo.frame_height, stock.value,
    )
    return canvas
