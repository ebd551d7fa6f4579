"""
blue_rule.py
============

Does: Decide whether a flag with several blues reports "light blue" next to "blue".
      Nearest-color matching folds every blue into BLUE, so the decision is made on
      the raw (pre-classification) blue-ish triples.
Returns: A new frozenset of canonical colors; the input is never mutated.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Sequence

from flag_color_extractor.extraction.color.constants import (
    BLUE_LIGHTNESS_SPREAD,
    LIGHT_BLUE_MIN_LIGHTNESS,
    RGB,
    CanonicalColor,
)
from flag_color_extractor.extraction.color.utils.rgb_distance import lightness

logger = logging.getLogger(__name__)

__all__ = ["apply_blue_exception", "blue_lightness_range"]


def blue_lightness_range(raw_blues: Sequence[RGB]) -> tuple[float, float] | None:
    """Does: Return (darkest, lightest) lightness of the raw blues, or None if empty."""
    if not raw_blues:
        return None
    values = [lightness(rgb) for rgb in raw_blues]
    return min(values), max(values)


def apply_blue_exception(
    colors: AbstractSet[CanonicalColor],
    raw_blues: Sequence[RGB],
) -> frozenset[CanonicalColor]:
    """
    Does: Add LIGHT_BLUE when BLUE is present, there are at least two raw blues,
          their lightness spread exceeds 20 and the lightest exceeds 45.
    """
    result = frozenset(colors)
    if CanonicalColor.BLUE not in result or len(raw_blues) < 2:
        return result

    darkest, lightest = blue_lightness_range(raw_blues)
    if lightest - darkest > BLUE_LIGHTNESS_SPREAD and lightest > LIGHT_BLUE_MIN_LIGHTNESS:
        logger.debug(
            "Blue exception: lightness %.1f..%.1f over %d blues", darkest, lightest, len(raw_blues)
        )
        return result | {CanonicalColor.LIGHT_BLUE}
    return result
