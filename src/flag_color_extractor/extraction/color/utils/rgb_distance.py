"""
rgb_distance.py
===============

Does: Parse color tokens found in SVG markup (hex, rgb()/rgba(), CSS keywords) and
      compute the few RGB-space measures the classifier and the blue rule need.
Used By: svg.scanner, logic.classifier, logic.blue_rule.
Returns: RGB triples (tuple[int,int,int]) or None, distances and lightness (float).
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import webcolors

from flag_color_extractor.extraction.color.constants import (
    BLUEISH_MIN_CHANNEL,
    IGNORED_COLOR_KEYWORDS,
    RGB,
)
from flag_color_extractor.extraction.color.vocab import named_color_to_rgb

__all__ = [
    "RGB",
    "parse_color",
    "parse_hex",
    "parse_rgb_function",
    "color_distance",
    "lightness",
    "is_blueish",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_RGB_FUNC_RE = re.compile(r"^rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,[^)]*)?\)$")
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$")


# =============================================================================
# 1) CORE DISTANCES
# =============================================================================

def _validate_rgb(rgb: RGB) -> None:
    r, g, b = rgb
    if not (0 <= r <= 255 and 0 <= g <= 255 and 0 <= b <= 255):
        raise ValueError(f"RGB out of bounds: {rgb}")


def color_distance(rgb1: RGB, rgb2: RGB) -> float:
    """Does: Compute Euclidean distance in sRGB space (no perceptual weighting)."""
    _validate_rgb(rgb1); _validate_rgb(rgb2)
    return sum((a - b) ** 2 for a, b in zip(rgb1, rgb2)) ** 0.5


def lightness(rgb: RGB) -> float:
    """Does: Relative lightness on a 0-100 scale from luma weights (0.299, 0.587, 0.114)."""
    r, g, b = rgb
    return (0.299 * r + 0.587 * g + 0.114 * b) / 2.55


def is_blueish(rgb: RGB) -> bool:
    """Does: Coarse channel-dominance test; only the blue rule uses it."""
    r, g, b = rgb
    return b > r and b > g and b > BLUEISH_MIN_CHANNEL


# =============================================================================
# 2) PARSERS
# =============================================================================

def parse_hex(token: str) -> Optional[RGB]:
    """
    Does: Parse '#rgb', '#rgba', '#rrggbb' or '#rrggbbaa' (lower-case), dropping alpha.
    Returns: (r, g, b) or None when the token is not a valid hex color.
    """
    m = _HEX_RE.match(token)
    if not m:
        return None
    digits = m.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits[:3])
    else:
        digits = digits[:6]
    return tuple(webcolors.hex_to_rgb(f"#{digits}"))


def parse_rgb_function(token: str) -> Optional[RGB]:
    """Does: Parse 'rgb(r, g, b)' / 'rgba(r, g, b, a)' with integer channels (clamped to 255)."""
    m = _RGB_FUNC_RE.match(token)
    if not m:
        return None
    # more than three significant digits is already past 255
    r, g, b = (255 if len(v.lstrip("0")) > 3 else min(int(v), 255) for v in m.groups())
    return (r, g, b)


def parse_color(text: object) -> Optional[RGB]:
    """
    Does: Turn one paint value from markup into an RGB triple.
    Returns: None for 'none'/'transparent'/'inherit'/'currentColor', url(...) paint
             references, and anything unrecognized. Never raises.
    """
    if not isinstance(text, str):
        return None
    token = _IMPORTANT_RE.sub("", text.strip().lower())
    if not token or token in IGNORED_COLOR_KEYWORDS or token.startswith("url("):
        return None

    if token.startswith("#"):
        return parse_hex(token)
    if token.startswith("rgb"):
        return parse_rgb_function(token)

    rgb = named_color_to_rgb(token)
    if rgb is None:
        logger.debug("Unrecognized color token: %r", text)
    return rgb
