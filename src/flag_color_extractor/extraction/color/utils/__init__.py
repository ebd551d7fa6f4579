"""
utils package.
=============

Does: Provide color token parsing and RGB-space measures shared across extraction modules.
"""

from .rgb_distance import (
    color_distance,
    is_blueish,
    lightness,
    parse_color,
    parse_hex,
    parse_rgb_function,
)

__all__ = [
    "parse_color",
    "parse_hex",
    "parse_rgb_function",
    "color_distance",
    "lightness",
    "is_blueish",
]

__docformat__ = "google"
