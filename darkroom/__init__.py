"""
darkroom package - analog stock reproduction for photographs.

Public API:
    apply_filter - decode, stylize and JPEG-encode in one call
    apply_stock  - stylize an ImageBuffer, returning the rendered surface
    ImageBuffer  - RGBA pixel grid
    Stock        - the 17 stock ids

Modules:
    buffer      - ImageBuffer data model
    codec       - Pillow decode/encode boundary
    compositing - blend modes, blur, gradients
    constants   - stock ids, catalogue and tuning values
    exceptions  - error taxonomy
    frame       - instant-film frame compositor
    kernels     - single-pass per-pixel colour kernels
    multipass   - snapshot-reading spatial effects
    overlays    - vignette, scratches, tape noise, date stamp, paper grain
    paths       - batch input/output directories
    pipeline    - stage ordering per stock
"""

from . import (
    buffer,
    codec,
    compositing,
    constants,
    exceptions,
    frame,
    kernels,
    multipass,
    overlays,
    paths,
    pipeline,
)
from .buffer import ImageBuffer
from .constants import STOCK_INFO, Stock
from .exceptions import DecodeError, RenderError, StylizeError, UnsupportedPresetError
from .pipeline import apply_filter, apply_stock

__all__ = [
    "DecodeError",
    "ImageBuffer",
    "RenderError",
    "STOCK_INFO",
    "Stock",
    "StylizeError",
    "UnsupportedPresetError",
    "apply_filter",
    "apply_stock",
    "buffer",
    "codec",
    "compositing",
    "constants",
    "exceptions",
    "frame",
    "kernels",
    "multipass",
    "overlays",
    "paths",
    "pipeline",
]
