"""
multipass.py
--------------------
Spatial effects that read from a frozen snapshot of the pre-transform pixels
and write into a separate destination array.

Each effect:
  - Takes ``source``: numpy uint8 RGB array (H, W, 3), never modified
  - Takes ``out``: destination uint8 RGB array of the same shape (optional)
  - Returns ``out`` with every pixel written

Because every read goes to ``source`` the result does not depend on the order
in which output pixels are produced; rows can be processed independently.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .constants import (
    EDGE_INK,
    EDGE_THRESHOLD,
    HALFTONE_DOT_SIZE,
    HALFTONE_INK,
    HALFTONE_PAPER,
    Stock,
)
from .utils import _channels, _clip, _contrast, _luma, _mean, _saturate, _stack


def _frozen(source: np.ndarray) -> np.ndarray:
    view = source.view()
    view.flags.writeable = False
    return view


def _dest(source: np.ndarray, out: "np.ndarray | None") -> np.ndarray:
    if out is None:
        return np.empty_like(source)
    if out.shape != source.shape:
        raise ValueError(f"Destination shape {out.shape} != source shape {source.shape}")
    if np.shares_memory(out, source):
        raise ValueError("Destination must not alias the source snapshot")
    return out


def misregistration_offset(width: int) -> int:
    return max(2, int(np.floor(width * 0.006)))


def misaligned(source: np.ndarray, out: "np.ndarray | None" = None) -> np.ndarray:
    """CMYK plate misregistration: red pulled from the right, blue from the left.

    A shifted column that would fall outside the image keeps the pixel's own
    channel value.
    """
    src = _frozen(source)
    out = _dest(source, out)
    W   = src.shape[1]
    off = misregistration_offset(W)
    xs  = np.arange(W)

    red_x  = np.where(xs + off < W, xs + off, xs)
    blue_x = np.where(xs - off >= 0, xs - off, xs)

    out[..., 0] = src[:, red_x, 0]
    out[..., 1] = src[..., 1]
    out[..., 2] = src[:, blue_x, 2]
    return out


def vhs_smear(source: np.ndarray, out: "np.ndarray | None" = None) -> np.ndarray:
    """VHS chroma smear plus the lifted, contrasty, washed-out tape look."""
    src = _frozen(source)
    out = _dest(source, out)
    W   = src.shape[1]
    shift_r = int(np.floor(W * 0.01))
    shift_b = int(np.floor(W * -0.005))
    xs = np.arange(W)

    r = src[:, np.minimum(W - 1, xs + shift_r), 0].astype(np.float32)
    g = src[..., 1].astype(np.float32)
    b = src[:, np.maximum(0, xs + shift_b), 2].astype(np.float32)

    r, g, b = (r - 20) * 1.2, (g - 20) * 1.2, (b - 20) * 1.2
    gray    = r * 0.3 + g * 0.59 + b * 0.11
    r, g, b = _saturate(r, g, b, gray, 0.8)

    out[...] = _stack(r, g, b)
    return out


def dv_interlace(source: np.ndarray, out: "np.ndarray | None" = None) -> np.ndarray:
    """Early-2000s DV: slight blue push, red pull, every odd scan-line dimmed."""
    src = _frozen(source)
    out = _dest(source, out)
    r, g, b = _channels(src)
    b = b * 1.05
    r = r * 0.98

    row_gain = np.where(np.arange(src.shape[0]) % 2 == 1, 0.75, 1.0).astype(np.float32)
    row_gain = row_gain[:, None]
    out[...] = _stack(r * row_gain, g * row_gain, b * row_gain)
    return out


def halftone(
    source: np.ndarray,
    out: "np.ndarray | None" = None,
    dot_size: int = HALFTONE_DOT_SIZE,
) -> np.ndarray:
    """60s comic print: posterized colour, luminance-driven dots on warm paper.

    Every pixel is tested against the centre of its ``dot_size`` tile; pixels
    closer than ``(1 - luminance) * dot_size / 1.2`` become ink.
    """
    src = _frozen(source)
    out = _dest(source, out)
    H, W = src.shape[:2]

    r, g, b = (np.floor(c / 64) * 64 for c in _channels(src))
    r, g, b = _saturate(r, g, b, _mean(r, g, b), 1.5)

    yy, xx = np.mgrid[0:H, 0:W]
    center = dot_size / 2
    dist   = np.sqrt((xx % dot_size - center) ** 2 + (yy % dot_size - center) ** 2)

    luminance = _luma(r, g, b) / 255.0
    is_dot    = dist < (1.0 - luminance) * (dot_size / 1.2)

    paper = np.asarray(HALFTONE_PAPER, dtype=np.float32)
    pr = np.minimum(255, r + (paper[0] - 255) * 0.2)
    pg = np.minimum(255, g + (paper[1] - 255) * 0.2)
    pb = np.minimum(255, b + (paper[2] - 255) * 0.2)

    ir, ig, ib = HALFTONE_INK
    out[...] = _stack(
        np.where(is_dot, ir, pr),
        np.where(is_dot, ig, pg),
        np.where(is_dot, ib, pb),
    )
    return out


def edge_mask(source: np.ndarray, threshold: float = EDGE_THRESHOLD) -> np.ndarray:
    """Boolean (H, W) mask of ink outlines.

    A pixel is an edge when its channel mean differs by more than *threshold*
    from its right or bottom neighbour.  The last row and last column are
    never edges.
    """
    level = _mean(*_channels(source))
    mask  = np.zeros(level.shape, dtype=bool)
    inner = level[:-1, :-1]
    right = np.abs(inner - level[:-1, 1:]) > threshold
    below = np.abs(inner - level[1:, :-1]) > threshold
    mask[:-1, :-1] = right | below
    return mask


def edge_ink(source: np.ndarray, out: "np.ndarray | None" = None) -> np.ndarray:
    """80s graphic novel: black outlines on saturated, contrasty fills."""
    src = _frozen(source)
    out = _dest(source, out)

    r, g, b = _channels(src)
    r, g, b = _saturate(r, g, b, _mean(r, g, b), 1.4)
    fill    = _stack(_contrast(r, 1.2), _contrast(g, 1.2), _contrast(b, 1.2))

    edges = edge_mask(src)
    out[...] = np.where(edges[..., None], _clip(np.asarray(EDGE_INK, dtype=np.float32)), fill)
    return out


# Registry

MULTIPASS: dict[Stock, Callable[..., np.ndarray]] = {
    Stock.MISALIGNED: misaligned,
    Stock.VHS_WORN:   vhs_smear,
    Stock.DV_CAM:     dv_interlace,
    Stock.COMICS_60S: halftone,
    Stock.COMICS_80S: edge_ink,
}
