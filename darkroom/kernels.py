"""
kernels.py
--------------------
Single-pass per-pixel colour kernels, one per simple stock.

Each kernel:
  - Takes a numpy uint8 RGB array (H, W, 3)
  - Takes an optional numpy Generator for stocks with grain/noise
  - Returns a new numpy uint8 RGB array (H, W, 3)

No kernel reads a neighbouring pixel, so the output at (y, x) depends only on
the input at (y, x) and, for the noisy stocks, the random draw for that pixel.
Kernels are total: any uint8 input produces a clamped uint8 output.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .constants import (
    AGED_GAZETTE,
    BLUEPRINT,
    MIMEOGRAPH,
    NEWSPAPER_CONTRAST,
    NEWSPAPER_NOISE,
    NEWSPAPER_RANGE,
    PHOTOCOPY_THRESHOLD,
    THERMAL_JAM_LEVEL,
    THERMAL_JAM_PROB,
    THERMAL_THRESHOLD,
    Duotone,
    Stock,
)
from .utils import _channels, _clip, _contrast, _luma, _mean, _rng, _saturate, _stack


def _uniform_noise(shape: tuple[int, ...], amount: float, rng: np.random.Generator) -> np.ndarray:
    """Symmetric uniform noise in [-amount/2, amount/2)."""
    return (rng.random(shape, dtype=np.float32) - 0.5) * amount


# Grayscale / duotone

def duotone(img: np.ndarray, tone: Duotone, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Luma → contrast → linear blend between ``tone.ink`` and ``tone.paper``."""
    gray = _luma(*_channels(img))
    if tone.noise > 0:
        gray = gray + _uniform_noise(gray.shape, tone.noise, _rng(rng))
    gray = np.clip(_contrast(gray, tone.contrast), 0, 255)
    t    = (gray / 255.0)[..., None]
    ink   = np.asarray(tone.ink, dtype=np.float32)
    paper = np.asarray(tone.paper, dtype=np.float32)
    return _clip(ink + (paper - ink) * t)


def aged_gazette(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Classic yellowed newsprint: dark grey ink on cream paper."""
    return duotone(img, AGED_GAZETTE, rng)


def mimeograph(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Purple spirit-duplicator ink on bluish-white paper."""
    return duotone(img, MIMEOGRAPH, rng)


def blueprint(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Architectural cyanotype; noiseless, so *rng* is never drawn from."""
    return duotone(img, BLUEPRINT, rng)


def newspaper_bw(
    img: np.ndarray,
    rng: "np.random.Generator | None" = None,
    *,
    noise: float = NEWSPAPER_NOISE,
) -> np.ndarray:
    """Hard black & white newsprint, never reaching pure black or white."""
    gray = _luma(*_channels(img))
    if noise > 0:
        gray = gray + _uniform_noise(gray.shape, noise, _rng(rng))
    lo, hi = NEWSPAPER_RANGE
    gray   = np.clip(_contrast(gray, NEWSPAPER_CONTRAST), lo, hi)
    return _clip(np.repeat(gray[..., None], 3, axis=2))


# Threshold

def _binarize(
    img: np.ndarray,
    threshold: float,
    noise: float,
    light: float,
    dark: float,
    rng: np.random.Generator,
) -> np.ndarray:
    gray = _luma(*_channels(img)) + _uniform_noise(img.shape[:2], noise, rng)
    return np.where(gray > threshold, light, dark).astype(np.float32)


def bad_photocopy(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Gritty xerox: noisy luma forced to paper white or toner black."""
    threshold, noise, light, dark = PHOTOCOPY_THRESHOLD
    val = _binarize(img, threshold, noise, light, dark, _rng(rng))
    return _clip(np.repeat(val[..., None], 3, axis=2))


def thermal(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Faded receipt paper with the occasional light 'paper jam' speck."""
    rng = _rng(rng)
    threshold, noise, light, dark = THERMAL_THRESHOLD
    val = _binarize(img, threshold, noise, light, dark, rng)
    jam = rng.random(val.shape) > (1.0 - THERMAL_JAM_PROB)
    val[jam] = THERMAL_JAM_LEVEL
    return _clip(np.repeat(val[..., None], 3, axis=2))


# Colour grades

def mag_70s(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Warm cast, faded blacks and muted saturation of 70s magazine stock."""
    r, g, b = _channels(img)
    r = r * 1.08 + 10
    g = g * 1.02 + 5
    b = b * 0.92
    # Fade
    r, g, b = r * 0.85 + 25, g * 0.85 + 25, b * 0.85 + 25
    r, g, b = _saturate(r, g, b, _luma(r, g, b), 0.85)
    return _stack(r, g, b)


def pop_80s(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Glossy, oversaturated 80s print with blown highlights."""
    r, g, b = _channels(img)
    r, g, b = _saturate(r, g, b, _mean(r, g, b), 1.6)
    r, g, b = (_contrast(c, 1.3) + 15 for c in (r, g, b))
    r, g, b = (np.where(c > 235, 255.0, c) for c in (r, g, b))
    return _stack(r, g, b)


def washed_90s(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Cool-green editorial cast with a hard shadow/highlight split."""
    r, g, b = _channels(img)
    r, g, b = r * 0.95, g * 1.05, b * 1.02
    r, g, b = (np.where(c < 100, c * 0.85, c * 1.15) for c in (r, g, b))
    return _stack(r, g, b)


def polaroid_600(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Polaroid 600: lifted blacks, warm tint, greenish shadows."""
    r, g, b = _channels(img)
    r, g, b = 25 + r * 0.85, 25 + g * 0.85, 25 + b * 0.85
    r, g, b = r + 20, g + 10, b - 5
    shadow = r < 100
    g = np.where(shadow, g + 5, g)
    b = np.where(shadow, b + 5, b)
    return _stack(r, g, b)


def polaroid_expired(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """Expired film: milky fade and a magenta chemical shift."""
    r, g, b = _channels(img)
    r, g, b = 40 + r * 0.75, 40 + g * 0.75, 40 + b * 0.75
    r, g, b = r + 15, g - 10, b + 10
    return _stack(r, g, b)


def polaroid_sx70(img: np.ndarray, rng: "np.random.Generator | None" = None) -> np.ndarray:
    """SX-70: punchy contrast, cool blue bias, slightly desaturated."""
    r, g, b = (_contrast(c, 1.2) for c in _channels(img))
    r, b    = r - 10, b + 20
    r, g, b = _saturate(r, g, b, _mean(r, g, b), 0.8)
    return _stack(r, g, b)


# Registry

KERNELS: dict[Stock, Callable[..., np.ndarray]] = {
    Stock.AGED_GAZETTE:  aged_gazette,
    Stock.NEWSPAPER_BW:  newspaper_bw,
    Stock.MIMEOGRAPH:    mimeograph,
    Stock.BLUEPRINT:     blueprint,
    Stock.BAD_PHOTOCOPY: bad_photocopy,
    Stock.THERMAL:       thermal,
    Stock.MAG_70S:       mag_70s,
    Stock.POP_80S:       pop_80s,
    Stock.WASHED_90S:    washed_90s,
    Stock.POLAROID_1:    polaroid_600,
    Stock.POLAROID_2:    polaroid_expired,
    Stock.POLAROID_3:    polaroid_sx70,
}
