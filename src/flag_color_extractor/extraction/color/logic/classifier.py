"""
classifier.py

Does:
    Map any RGB triple to the nearest of the twelve canonical flag colors and keep
    color lists in palette order.

Returns:
    - find_closest_color(rgb) -> CanonicalColor (total, deterministic)
    - sort_palette_order(colors) -> tuple[CanonicalColor, ...]
    - coerce_canonical(name) -> CanonicalColor
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from flag_color_extractor.extraction.color.constants import (
    PALETTE,
    PALETTE_ORDER,
    RGB,
    CanonicalColor,
)
from flag_color_extractor.extraction.color.utils.rgb_distance import color_distance

logger = logging.getLogger(__name__)

__all__ = ["find_closest_color", "sort_palette_order", "coerce_canonical"]

# Spellings accepted by coerce_canonical() besides the enum values themselves
_NAME_ALIASES = {
    "gray": CanonicalColor.GREY,
    "lightblue": CanonicalColor.LIGHT_BLUE,
}


def find_closest_color(rgb: RGB) -> CanonicalColor:
    """
    Does:
        Compare `rgb` against every palette anchor by Euclidean distance.
        Ties go to the anchor declared first.

    Returns:
        The nearest CanonicalColor; never None.
    """
    best, best_d = CanonicalColor.BLACK, float("inf")
    for name, anchor in PALETTE.items():
        d = color_distance(rgb, anchor)
        if d < best_d:
            best, best_d = name, d
    return best


def sort_palette_order(colors: Iterable[CanonicalColor]) -> Tuple[CanonicalColor, ...]:
    """Does: Deduplicate and sort canonical colors by palette position."""
    return tuple(sorted(set(colors), key=PALETTE_ORDER.__getitem__))


def coerce_canonical(name: str | CanonicalColor) -> CanonicalColor:
    """Does: Resolve a free-form name ('Light-Blue', 'gray') to a member or raise ValueError."""
    if isinstance(name, CanonicalColor):
        return name
    key = " ".join(str(name).strip().lower().replace("-", " ").replace("_", " ").split())
    if key in _NAME_ALIASES:
        return _NAME_ALIASES[key]
    try:
        return CanonicalColor(key)
    except ValueError:
        raise ValueError(f"Not a canonical flag color: {name!r}") from None
