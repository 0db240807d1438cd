"""
constants.py
--------------------
Shared constants for the stock library:
  - stock ids and their display catalogue
  - per-stock tuning values (ink/paper colours, noise, contrast, shifts)
  - overlay eligibility sets
  - instant-film frame palettes
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import UnsupportedPresetError

JPEG_QUALITY = 0.90

# Luma weights (ITU-R BT.601)
LUMA_WEIGHTS: tuple[float, float, float] = (0.299, 0.587, 0.114)


class Stock(str, Enum):
    """Closed set of analog stocks a photo can be reproduced on."""

    NEWSPAPER_BW  = "newspaper-bw"
    AGED_GAZETTE  = "aged-gazette"
    MAG_70S       = "70s-mag"
    POP_80S       = "80s-pop"
    WASHED_90S    = "90s-washed"
    BAD_PHOTOCOPY = "bad-photocopy"
    MIMEOGRAPH    = "mimeograph"
    BLUEPRINT     = "blueprint"
    MISALIGNED    = "misaligned"
    THERMAL       = "thermal"
    VHS_WORN      = "vhs-worn"
    DV_CAM        = "dv-cam"
    COMICS_60S    = "comics-60s"
    COMICS_80S    = "comics-80s"
    POLAROID_1    = "polaroid-1"
    POLAROID_2    = "polaroid-2"
    POLAROID_3    = "polaroid-3"

    @classmethod
    def parse(cls, value: "Stock | str") -> "Stock":
        """Return the stock for *value*, raising UnsupportedPresetError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedPresetError(f"Unknown stock: {value!r}") from None

    @property
    def is_instant_film(self) -> bool:
        return self in INSTANT_FILM_STOCKS


INSTANT_FILM_STOCKS: frozenset[Stock] = frozenset({
    Stock.POLAROID_1, Stock.POLAROID_2, Stock.POLAROID_3,
})


# Catalogue: stock → (display name, description)
STOCK_INFO: dict[Stock, tuple[str, str]] = {
    Stock.MAG_70S:       ("70s Vintage",      "Warm, soft, faded yellow paper"),
    Stock.POP_80S:       ("80s Glossy",       "Saturated, garish, high contrast"),
    Stock.WASHED_90S:    ("90s Editorial",    "Cool, greenish, high flash look"),
    Stock.POLAROID_1:    ("Polaroid 600",     "Classic warm instant film"),
    Stock.POLAROID_2:    ("Polaroid Expired", "Faded, magenta chemical shift"),
    Stock.POLAROID_3:    ("Polaroid SX-70",   "Cool, blue, high contrast"),
    Stock.COMICS_60S:    ("Comics 60s",       "Halftones, CMYK dots, yellow paper"),
    Stock.COMICS_80S:    ("Comics 80s",       "Heavy ink, vibrant, graphic novel"),
    Stock.VHS_WORN:      ("VHS Worn",         "Magnetic tracking error & static"),
    Stock.DV_CAM:        ("DV Camcorder",     "2000s Interlaced digital video"),
    Stock.AGED_GAZETTE:  ("Aged Gazette",     "Classic yellowed newspaper"),
    Stock.NEWSPAPER_BW:  ("Daily News",       "Black & white halftone style"),
    Stock.MIMEOGRAPH:    ("Mimeograph",       "Purple ink handout"),
    Stock.BAD_PHOTOCOPY: ("Bad Copy",         "Gritty B&W xerox"),
    Stock.MISALIGNED:    ("Misaligned",       "CMYK Print error"),
    Stock.THERMAL:       ("Receipt",          "Faded thermal printer"),
    Stock.BLUEPRINT:     ("Blueprint",        "Architectural blue"),
}


# Duotone (ink → paper) mappers

@dataclass(frozen=True, slots=True)
class Duotone:
    """Two-colour luma mapping: dark values land on *ink*, light on *paper*."""

    ink: tuple[int, int, int]
    paper: tuple[int, int, int]
    noise: float
    contrast: float


AGED_GAZETTE = Duotone(ink=(45, 40, 40),  paper=(245, 238, 215), noise=20.0, contrast=1.5)
MIMEOGRAPH   = Duotone(ink=(60, 20, 120), paper=(240, 240, 255), noise=15.0, contrast=1.5)
BLUEPRINT    = Duotone(ink=(0, 30, 85),   paper=(230, 240, 255), noise=0.0,  contrast=2.0)

NEWSPAPER_NOISE    = 30.0
NEWSPAPER_CONTRAST = 2.0
NEWSPAPER_RANGE    = (15.0, 245.0)

# Threshold mappers: (threshold, noise, light level, dark level)
PHOTOCOPY_THRESHOLD = (110.0, 60.0, 255.0, 20.0)
THERMAL_THRESHOLD   = (130.0, 30.0, 240.0, 20.0)
THERMAL_JAM_LEVEL   = 200.0
THERMAL_JAM_PROB    = 0.01

# Comics
HALFTONE_DOT_SIZE = 4
HALFTONE_INK      = (20, 20, 40)
HALFTONE_PAPER    = (245, 235, 210)
EDGE_THRESHOLD    = 30.0
EDGE_INK          = (10, 10, 15)


# Overlay eligibility

# Stocks that skip the generic vignette (flat/bright looks, or instant film
# which gets its own pass)
NO_VIGNETTE_STOCKS: frozenset[Stock] = INSTANT_FILM_STOCKS | frozenset({
    Stock.POP_80S, Stock.BAD_PHOTOCOPY, Stock.DV_CAM, Stock.COMICS_60S,
})
HEAVY_VIGNETTE_STOCKS: frozenset[Stock] = frozenset({
    Stock.BLUEPRINT, Stock.THERMAL, Stock.VHS_WORN, Stock.COMICS_80S,
})
SCRATCHY_STOCKS: frozenset[Stock] = frozenset({
    Stock.AGED_GAZETTE, Stock.BAD_PHOTOCOPY, Stock.THERMAL,
    Stock.BLUEPRINT, Stock.COMICS_60S,
})

VIGNETTE_DEFAULT  = 0.2
VIGNETTE_HEAVY    = 0.6
VIGNETTE_INSTANT  = 0.5

SCRATCH_AREA          = 50_000
SCRATCH_OPACITY       = 0.3
SCRATCH_OPACITY_EXTREME = 0.5

DATE_STAMP_COLOR = (255, 153, 0)
DATE_STAMP_YEARS = (1998, 2005)

STAIN_COLOR   = (160, 140, 100)
STAIN_OPACITY = 0.15


# Instant-film frames

@dataclass(frozen=True, slots=True)
class FrameStyle:
    """Paper colour and grain intensity for an instant-film border."""

    paper: tuple[int, int, int]
    grain: float


FRAME_STYLES: dict[Stock, FrameStyle] = {
    Stock.POLAROID_1: FrameStyle(paper=(0xFD, 0xFB, 0xF7), grain=0.05),  # clean
    Stock.POLAROID_2: FrameStyle(paper=(0xF4, 0xEF, 0xE1), grain=0.15),  # aged
    Stock.POLAROID_3: FrameStyle(paper=(0xF0, 0xF4, 0xF7), grain=0.08),  # cool/dirty
}

FRAME_BORDER_RATIO = 0.08
FRAME_BOTTOM_RATIO = 0.35
FRAME_SHADOW_OPACITY = 0.4
FRAME_SHADOW_OFFSET  = (2, 4)
RIDGE_LIGHT_OPACITY  = 0.4
RIDGE_DARK_OPACITY   = 0.1
RIDGE_WIDTH          = 2

EXPIRED_TINT = (255, 200, 200)
EXPIRED_TINT_OPACITY = 0.1
