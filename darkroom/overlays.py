"""
overlays.py
--------------------
Surface-level overlays composited on top of the colour-transformed photo.

Each overlay:
  - Takes an RGBA uint8 surface (H, W, 4)
  - Takes an optional numpy Generator when it places anything at random
  - Returns a new RGBA uint8 surface of the same size

Layers are rasterised to a coverage map (Pillow ImageDraw for strokes and
text, numpy for gradients and noise) and merged with ``compositing.composite``.
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .compositing import (
    CompositeOp,
    Shadow,
    blur_surface,
    composite,
    gaussian_blur,
    radial_gradient,
    saturate,
)
from .constants import (
    DATE_STAMP_COLOR,
    DATE_STAMP_YEARS,
    EXPIRED_TINT,
    EXPIRED_TINT_OPACITY,
    SCRATCH_AREA,
    SCRATCH_OPACITY,
    SCRATCH_OPACITY_EXTREME,
    STAIN_COLOR,
    STAIN_OPACITY,
    Stock,
)
from .exceptions import RenderError
from .utils import _clip, _rng

_MONO_FONTS = (
    "DejaVuSansMono-Bold.ttf",
    "LiberationMono-Bold.ttf",
    "courbd.ttf",
    "Courier New Bold.ttf",
)


def vignette(surface: np.ndarray, intensity: float) -> np.ndarray:
    """Radial darkening toward the edges, multiplied onto the surface."""
    H, W = surface.shape[:2]
    cov  = radial_gradient(
        H, W,
        center=(W / 2, H / 2),
        inner=W / 5,
        outer=max(W, H) / 1.5,
        alpha=(0.0, intensity),
    )
    return composite(surface, (0, 0, 0), cov, CompositeOp("multiply"))


def scratches(
    surface: np.ndarray,
    rng: "np.random.Generator | None" = None,
    extreme: bool = False,
) -> np.ndarray:
    """Short near-vertical hairline scratches, screened on in white."""
    rng  = _rng(rng)
    H, W = surface.shape[:2]
    n    = (W * H) // SCRATCH_AREA
    if n < 1:
        return surface

    mask = Image.new("L", (W, H), 0)
    draw = ImageDraw.Draw(mask)
    for _ in range(n):
        x      = rng.random() * W
        y      = rng.random() * H
        length = rng.random() * 50 + 10
        angle  = (rng.random() - 0.5) * math.pi / 4 + math.pi / 2
        draw.line(
            [(x, y), (x + math.cos(angle) * length, y + math.sin(angle) * length)],
            fill=255,
            width=1,
        )

    cov     = np.asarray(mask, dtype=np.float32) / 255.0
    opacity = SCRATCH_OPACITY_EXTREME if extreme else SCRATCH_OPACITY
    return composite(surface, (255, 255, 255), cov, CompositeOp("screen", opacity))


def tracking_noise(surface: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """VHS head-switching band along the bottom 15% plus five glitch bars.

    The band replaces the photo outright: 70% of its texels are black or
    white at alpha 100, the rest fully transparent.
    """
    rng  = _rng(rng)
    H, W = surface.shape[:2]
    out  = surface

    band_h = int(H * 0.15)
    if band_h > 0:
        band_y = H - band_h
        texel  = np.where(rng.random((band_h, W)) > 0.5, 255, 0).astype(np.uint8)
        filled = rng.random((band_h, W)) > 0.3
        out = surface.copy()
        out[band_y:, :, :3] = np.where(filled, texel, 0)[..., None]
        out[band_y:, :, 3]  = np.where(filled, 100, 0)

    bars = np.zeros((H, W), dtype=np.float32)
    for _ in range(5):
        y      = rng.random() * H
        line_h = rng.random() * 3 + 1
        y0     = int(y)
        y1     = max(y0 + 1, min(H, int(round(y + line_h))))
        bars[y0:y1, :] = 1.0
    return composite(out, (255, 255, 255), bars, CompositeOp(opacity=0.6))


def date_stamp_text(rng: "np.random.Generator | None" = None) -> str:
    """Random camcorder timestamp, ``MM DD YYYY  HH:MM``."""
    rng = _rng(rng)
    first, last = DATE_STAMP_YEARS
    year   = first + int(rng.random() * (last - first + 1))
    month  = 1 + int(rng.random() * 12)
    day    = 1 + int(rng.random() * 28)
    hour   = int(rng.random() * 24)
    minute = int(rng.random() * 60)
    return f"{month:02d} {day:02d} {year}  {hour:02d}:{minute:02d}"


def _mono_font(size: int) -> ImageFont.FreeTypeFont:
    for name in _MONO_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def date_stamp(surface: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Burn an orange camcorder date into the bottom-left corner."""
    H, W = surface.shape[:2]
    text = date_stamp_text(rng)
    size = max(16, int(H * 0.05))

    try:
        mask = Image.new("L", (W, H), 0)
        ImageDraw.Draw(mask).text(
            (W * 0.05, H * 0.95), text, fill=255, font=_mono_font(size), anchor="ls"
        )
    except (OSError, ValueError) as exc:
        raise RenderError(f"Could not rasterise date stamp: {exc}") from exc

    cov = np.asarray(mask, dtype=np.float32) / 255.0
    op  = CompositeOp(shadow=Shadow(color=(0, 0, 0), blur=2.0))
    return composite(surface, DATE_STAMP_COLOR, cov, op)


def instant_softness(surface: np.ndarray, stock: Stock) -> np.ndarray:
    """Instant-film softness: lose digital sharpness, then soft-light bloom.

    Blur sigma scales with width (``max(1, 0.002 * W)``); the bloom layer is
    three times blurrier and 20% more saturated.  Expired film also gets a
    pale pink screen.
    """
    H, W  = surface.shape[:2]
    sigma = max(1.0, W * 0.002)
    out   = blur_surface(surface, sigma)

    bloom = saturate(gaussian_blur(out[..., :3], sigma * 3), 1.2)
    ones  = np.ones((H, W), dtype=np.float32)
    out   = composite(out, bloom, ones, CompositeOp("soft-light", 0.5))

    if stock is Stock.POLAROID_2:
        out = composite(out, EXPIRED_TINT, ones, CompositeOp("screen", EXPIRED_TINT_OPACITY))
    return out


def paper_texture(
    surface: np.ndarray,
    intensity: float,
    rng: "np.random.Generator | None" = None,
) -> np.ndarray:
    """Paper grain on about half the pixels, plus 1-4 brown stains when intensity > 0.1."""
    rng  = _rng(rng)
    H, W = surface.shape[:2]

    grainy = rng.random((H, W)) > 0.5
    jitter = (rng.random((H, W)) - 0.5) * 30 * intensity
    jitter = np.where(grainy, jitter, 0.0)

    out = surface.copy()
    out[..., :3] = _clip(surface[..., :3].astype(np.float32) + jitter[..., None])

    if intensity > 0.1:
        for _ in range(int(rng.random() * 4) + 1):
            x = rng.random() * W
            y = rng.random() * H
            r = rng.random() * (W * 0.3) + 20
            cov = radial_gradient(
                H, W, center=(x, y), inner=0.0, outer=r,
                alpha=(STAIN_OPACITY, 0.0), bounded=True,
            )
            out = composite(out, STAIN_COLOR, cov, CompositeOp("multiply"))
    return out
