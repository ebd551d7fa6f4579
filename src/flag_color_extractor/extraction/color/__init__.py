"""
color.
=====

Does: Aggregate the canonical palette, the accepted CSS keywords, and the accessors
      shared by the classifier, the blue rule and the svg scanner.
Returns: Pure data structures and accessor functions; no side effects.
"""

# ── Constants ────────────────────────────────────────────────────────────────
from .constants import (
    BLUE_LIGHTNESS_SPREAD,
    DEFAULT_FILL,
    LIGHT_BLUE_MIN_LIGHTNESS,
    PALETTE,
    PALETTE_ORDER,
    RGB,
    CanonicalColor,
)

# ── Vocabulary ───────────────────────────────────────────────────────────────
from .vocab import (
    FLAG_NAMED_COLORS,
    get_named_color_map,
)

__all__ = [
    # constants
    "RGB",
    "CanonicalColor",
    "PALETTE",
    "PALETTE_ORDER",
    "BLUE_LIGHTNESS_SPREAD",
    "LIGHT_BLUE_MIN_LIGHTNESS",
    "DEFAULT_FILL",
    # vocab
    "FLAG_NAMED_COLORS",
    "get_named_color_map",
]
