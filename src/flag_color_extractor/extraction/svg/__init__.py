"""
svg package.
============

Does: Scan SVG flag documents for painted colors.
"""

from .scanner import (
    SvgColorResult,
    SvgScanError,
    extract_colors_from_svg,
    parse_style_declarations,
    stylesheet_declarations,
)

__all__ = [
    "SvgColorResult",
    "SvgScanError",
    "extract_colors_from_svg",
    "parse_style_declarations",
    "stylesheet_declarations",
]
