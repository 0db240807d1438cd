"""
utils.py
--------------------
Pure numpy helpers shared across the kernel, multi-pass and overlay modules.
"""

from __future__ import annotations

import numpy as np

from .constants import LUMA_WEIGHTS


def _clip(arr: np.ndarray) -> np.ndarray:
    """Round to nearest and clamp into uint8, as an 8-bit canvas store would."""
    return np.clip(np.rint(arr), 0, 255).astype(np.uint8)


def _rng(rng: "np.random.Generator | None" = None) -> np.random.Generator:
    """Return *rng*, or a fresh unseeded generator when none is injected."""
    return rng if rng is not None else np.random.default_rng()


def _channels(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split an (H, W, 3) array into float32 R, G, B planes."""
    out = rgb.astype(np.float32)
    return out[..., 0], out[..., 1], out[..., 2]


def _luma(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


def _mean(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (r + g + b) / 3.0


def _saturate(
    r: np.ndarray, g: np.ndarray, b: np.ndarray, gray: np.ndarray, amount: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Push each channel away from (amount > 1) or toward (amount < 1) *gray*."""
    return (
        gray + (r - gray) * amount,
        gray + (g - gray) * amount,
        gray + (b - gray) * amount,
    )


def _contrast(arr: np.ndarray, k: float, mid: float = 128.0) -> np.ndarray:
    return (arr - mid) * k + mid


def _stack(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Clamp and stack float planes back into an (H, W, 3) uint8 array."""
    return _clip(np.stack([r, g, b], axis=-1))
