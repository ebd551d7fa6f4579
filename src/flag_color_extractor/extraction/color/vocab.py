"""
vocab
=====

Does: Define the CSS color keywords accepted in flag markup and resolve them to RGB
      through `webcolors` (CSS3 definitions).
Used By: parse_color() in utils.rgb_distance.
Returns: A frozen name set and a cached {name: RGB} accessor.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, FrozenSet

import webcolors

from .constants import RGB

log = logging.getLogger(__name__)

__all__ = ["FLAG_NAMED_COLORS", "get_named_color_map", "named_color_to_rgb"]

# ── Keywords seen in flag SVGs (kept small on purpose) ───────────────────────
FLAG_NAMED_COLORS: FrozenSet[str] = frozenset({
    # basics
    "black", "white", "red", "green", "blue", "yellow", "orange", "purple",
    "pink", "brown", "gold", "silver", "gray", "grey",
    # CSS 2.1 extras
    "navy", "maroon", "olive", "teal", "aqua", "cyan", "lime", "fuchsia", "magenta",
    # darker / lighter variants
    "crimson", "darkred", "darkgreen", "darkblue", "lightblue", "skyblue",
    "royalblue", "forestgreen", "seagreen", "turquoise",
    # warm tones
    "coral", "salmon", "khaki", "tan", "sienna", "chocolate", "saddlebrown",
    "peru", "wheat", "beige", "ivory", "snow",
})


@lru_cache(maxsize=1)
def get_named_color_map() -> Dict[str, RGB]:
    """Does: Build {keyword: (r, g, b)} for FLAG_NAMED_COLORS once, via webcolors."""
    named: Dict[str, RGB] = {}
    for name in sorted(FLAG_NAMED_COLORS):
        named[name] = tuple(webcolors.name_to_rgb(name))
    log.debug("Named color map built (%d entries)", len(named))
    return named


def named_color_to_rgb(name: str) -> RGB | None:
    """Does: Return the RGB of a known keyword (already lower-cased), else None."""
    return get_named_color_map().get(name)
