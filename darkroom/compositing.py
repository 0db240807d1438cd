"""
compositing.py
--------------------
Explicit per-pixel compositing for overlay layers.

A layer is a colour (a constant RGB triple or an (H, W, 3) array, 0-255)
plus a coverage map (H, W) in [0, 1].  ``composite()`` merges a layer onto an
RGBA uint8 surface with a ``CompositeOp`` describing the blend mode, global
opacity and optional drop shadow.  The op is an immutable value passed per
call, so no blend/alpha/shadow setting outlives the step that used it.

Blend modes follow the separable formulas of the W3C Compositing and Blending
Level 1 recommendation, combined with Porter-Duff source-over.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .exceptions import RenderError
from .utils import _clip


# Blend functions (Cb = backdrop, Cs = source, both float in [0, 1])

def _normal(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cs


def _multiply(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cb * cs


def _screen(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cb + cs - cb * cs


def _soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    d = np.where(cb <= 0.25, ((16 * cb - 12) * cb + 4) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1 - 2 * cs) * cb * (1 - cb),
        cb + (2 * cs - 1) * (d - cb),
    )


BLEND_MODES: dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "source-over": _normal,
    "multiply":    _multiply,
    "screen":      _screen,
    "soft-light":  _soft_light,
}


@dataclass(frozen=True, slots=True)
class Shadow:
    """Drop shadow cast by a layer's coverage (canvas ``shadow*`` semantics)."""

    color: tuple[int, int, int] = (0, 0, 0)
    opacity: float = 1.0
    blur: float = 0.0
    offset: tuple[int, int] = (0, 0)


@dataclass(frozen=True, slots=True)
class CompositeOp:
    """One compositing request: blend mode, global opacity, optional shadow."""

    mode: str = "source-over"
    opacity: float = 1.0
    shadow: Shadow | None = field(default=None)

    def __post_init__(self) -> None:
        if self.mode not in BLEND_MODES:
            raise ValueError(f"Unknown blend mode: {self.mode!r}")
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"Opacity must be in [0, 1], got {self.opacity}")


def allocate(height: int, width: int, channels: int = 4) -> np.ndarray:
    """Allocate a uint8 surface, raising RenderError instead of MemoryError."""
    try:
        return np.zeros((height, width, channels), dtype=np.uint8)
    except (MemoryError, ValueError) as exc:
        raise RenderError(f"Could not allocate {width}x{height} surface: {exc}") from exc


def _blend_onto(
    surface: np.ndarray, color: np.ndarray, coverage: np.ndarray, mode: str
) -> np.ndarray:
    cb = surface[..., :3].astype(np.float32) / 255.0
    ab = surface[..., 3:4].astype(np.float32) / 255.0
    cs = np.broadcast_to(np.asarray(color, dtype=np.float32) / 255.0, cb.shape)
    a_s = np.clip(coverage, 0.0, 1.0).astype(np.float32)[..., None]

    blended = np.clip(BLEND_MODES[mode](cb, cs), 0.0, 1.0)
    ao      = a_s + ab * (1 - a_s)
    premul  = a_s * (1 - ab) * cs + a_s * ab * blended + (1 - a_s) * ab * cb
    co      = np.divide(premul, ao, out=np.zeros_like(premul), where=ao > 0)

    out = np.empty_like(surface)
    out[..., :3] = _clip(co * 255.0)
    out[..., 3]  = _clip(ao[..., 0] * 255.0)
    return out


def _shift(arr: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Translate a 2-D map by (dx, dy), filling uncovered cells with zero."""
    H, W = arr.shape
    out  = np.zeros_like(arr)
    if abs(dx) >= W or abs(dy) >= H:
        return out
    ys = slice(max(0, dy), H + min(0, dy))
    xs = slice(max(0, dx), W + min(0, dx))
    ys_src = slice(max(0, -dy), H + min(0, -dy))
    xs_src = slice(max(0, -dx), W + min(0, -dx))
    out[ys, xs] = arr[ys_src, xs_src]
    return out


def composite(
    surface: np.ndarray,
    color: "np.ndarray | tuple[int, int, int]",
    coverage: np.ndarray,
    op: CompositeOp = CompositeOp(),
) -> np.ndarray:
    """Return *surface* with the layer (``color`` x ``coverage``) composited by *op*.

    Args:
        surface:  RGBA uint8 array (H, W, 4); not modified.
        color:    RGB 0-255, either a triple or an (H, W, 3) array.
        coverage: float (H, W) layer alpha in [0, 1] before ``op.opacity``.
        op:       blend mode, opacity and optional drop shadow.

    Returns:
        New RGBA uint8 array of the same shape.
    """
    if coverage.shape != surface.shape[:2]:
        raise RenderError(
            f"Layer coverage {coverage.shape} does not match surface {surface.shape[:2]}"
        )
    alpha = coverage.astype(np.float32) * op.opacity
    out   = surface
    if op.shadow is not None:
        sh = op.shadow
        cast = _shift(alpha, sh.offset[0], sh.offset[1])
        if sh.blur > 0:
            # canvas shadowBlur is twice the Gaussian standard deviation
            cast = gaussian_blur(cast, sh.blur / 2.0)
        out = _blend_onto(out, np.asarray(sh.color), cast * sh.opacity, "source-over")
    return _blend_onto(out, np.asarray(color), alpha, op.mode)


# Filters

def gaussian_kernel(sigma: float) -> np.ndarray:
    """Normalised 1-D Gaussian with radius ceil(3 * sigma)."""
    radius = max(1, int(math.ceil(3.0 * sigma)))
    x      = np.arange(-radius, radius + 1, dtype=np.float32)
    k      = np.exp(-(x ** 2) / (2.0 * sigma ** 2))
    return k / k.sum()


def _convolve_axis(arr: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
    radius = len(kernel) // 2
    pad    = [(0, 0)] * arr.ndim
    pad[axis] = (radius, radius)
    padded = np.pad(arr, pad, mode="edge")
    n      = arr.shape[axis]
    lead   = (slice(None),) * axis
    out    = np.zeros(arr.shape, dtype=np.float32)
    for i, w in enumerate(kernel):
        out += w * padded[lead + (slice(i, i + n),)]
    return out


def gaussian_blur(arr: np.ndarray, sigma: float) -> np.ndarray:
    """Separable Gaussian blur over the first two axes (edge-replicated borders).

    Works on (H, W) maps and (H, W, C) images; returns float32.
    """
    out = arr.astype(np.float32)
    if sigma <= 0:
        return out
    kernel = gaussian_kernel(sigma)
    out = _convolve_axis(out, kernel, axis=1)
    out = _convolve_axis(out, kernel, axis=0)
    return out


def blur_surface(surface: np.ndarray, sigma: float) -> np.ndarray:
    """Gaussian-blur an RGBA uint8 surface, returning uint8."""
    return _clip(gaussian_blur(surface, sigma))


def saturate(rgb: np.ndarray, amount: float) -> np.ndarray:
    """CSS ``saturate()`` colour matrix applied to an (H, W, 3) array (float out)."""
    s = float(amount)
    matrix = np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ], dtype=np.float32)
    return np.clip(rgb.astype(np.float32) @ matrix.T, 0, 255)


def radial_gradient(
    height: int,
    width: int,
    center: tuple[float, float],
    inner: float,
    outer: float,
    alpha: tuple[float, float],
    bounded: bool = False,
) -> np.ndarray:
    """Coverage map of a two-stop radial gradient between concentric circles.

    Alpha ramps linearly from ``alpha[0]`` at radius *inner* to ``alpha[1]``
    at *outer* and is padded beyond both.  With *bounded*, coverage outside
    the outer circle is zero (a gradient-filled disc).
    """
    cx, cy = center
    yy, xx = np.mgrid[0:height, 0:width].astype(np.float32)
    # Sample at pixel centres
    dist = np.sqrt((xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2)
    span = max(outer - inner, 1e-6)
    t    = np.clip((dist - inner) / span, 0.0, 1.0)
    cov  = alpha[0] + (alpha[1] - alpha[0]) * t
    if bounded:
        cov = np.where(dist <= outer, cov, 0.0)
    return cov.astype(np.float32)
