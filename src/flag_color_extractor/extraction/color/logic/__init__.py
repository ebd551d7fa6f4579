"""
logic package.
==============

Does: Expose nearest-color classification and the blue / light-blue rule.
"""

from .blue_rule import apply_blue_exception, blue_lightness_range
from .classifier import coerce_canonical, find_closest_color, sort_palette_order

__all__ = [
    "find_closest_color",
    "sort_palette_order",
    "coerce_canonical",
    "apply_blue_exception",
    "blue_lightness_range",
]
