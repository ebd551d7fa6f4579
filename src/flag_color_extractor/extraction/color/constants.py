# constants.py
# ============

"""
constants.
=========

Does: Define the closed set of canonical flag colors, their RGB anchors, and the
      thresholds of the blue / light-blue rule.
Used By: Nearest-color classification, the blue rule, the svg scanner and reports.
Returns: Pure data structures only (no side effects).
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

RGB = Tuple[int, int, int]

__all__ = [
    "RGB",
    "CanonicalColor",
    "PALETTE",
    "PALETTE_ORDER",
    "BLUE_LIGHTNESS_SPREAD",
    "LIGHT_BLUE_MIN_LIGHTNESS",
    "BLUEISH_MIN_CHANNEL",
    "DEFAULT_FILL",
    "IGNORED_COLOR_KEYWORDS",
]


# ── 1) Canonical names ───────────────────────────────────────────────────────
class CanonicalColor(str, Enum):
    """The twelve color names a flag may be reported with (declaration = palette order)."""

    BLACK = "black"
    WHITE = "white"
    GREY = "grey"
    PINK = "pink"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    LIGHT_BLUE = "light blue"
    PURPLE = "purple"
    BROWN = "brown"

    def __str__(self) -> str:
        return self.value


# ── 2) Anchors ───────────────────────────────────────────────────────────────
# Typical flag shades, not ground truth. Order matters: first minimum wins.
PALETTE: Mapping[CanonicalColor, RGB] = MappingProxyType(
    {
        CanonicalColor.BLACK: (0, 0, 0),
        CanonicalColor.WHITE: (255, 255, 255),
        CanonicalColor.GREY: (128, 128, 128),
        CanonicalColor.PINK: (255, 105, 180),
        CanonicalColor.RED: (200, 30, 30),
        CanonicalColor.ORANGE: (255, 140, 0),
        CanonicalColor.YELLOW: (255, 215, 0),
        CanonicalColor.GREEN: (0, 128, 0),
        CanonicalColor.BLUE: (0, 50, 160),
        CanonicalColor.LIGHT_BLUE: (100, 180, 230),
        CanonicalColor.PURPLE: (128, 0, 128),
        CanonicalColor.BROWN: (139, 90, 43),
    }
)

PALETTE_ORDER: dict[CanonicalColor, int] = {c: i for i, c in enumerate(CanonicalColor)}


# ── 3) Blue rule ─────────────────────────────────────────────────────────────
BLUE_LIGHTNESS_SPREAD = 20.0  # lightest - darkest must exceed this
LIGHT_BLUE_MIN_LIGHTNESS = 45.0  # and the lightest must exceed this
BLUEISH_MIN_CHANNEL = 50


# ── 4) SVG parsing ───────────────────────────────────────────────────────────
DEFAULT_FILL: RGB = (0, 0, 0)  # SVG initial value of `fill`

IGNORED_COLOR_KEYWORDS = frozenset({"none", "transparent", "inherit", "currentcolor"})
