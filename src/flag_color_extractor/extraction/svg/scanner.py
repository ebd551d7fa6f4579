"""
scanner.py
==========

Does: Read one SVG document and report which canonical flag colors it paints.
      Colors come from `fill`, `stroke` and `stop-color` (attributes, inline
      `style` and `<style>` sheets). Content of non-rendering containers (defs,
      clipPath, mask, symbol, pattern, gradients) only counts when rendered
      content references it. Shapes left without any paint fall back to SVG's
      default black fill.
Returns: SvgColorResult (palette-ordered colors + raw triples for diagnostics).
Used By: extraction.orchestrator, tests.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from flag_color_extractor.extraction.color.constants import DEFAULT_FILL, RGB, CanonicalColor
from flag_color_extractor.extraction.color.logic import (
    apply_blue_exception,
    find_closest_color,
    sort_palette_order,
)
from flag_color_extractor.extraction.color.utils import is_blueish, parse_color
from flag_color_extractor.extraction.general.utils import debug

logger = logging.getLogger(__name__)

__all__ = [
    "SvgScanError",
    "SvgColorResult",
    "extract_colors_from_svg",
    "parse_style_declarations",
    "stylesheet_declarations",
]

# ── Vocabulary ───────────────────────────────────────────────────────────────
PAINT_PROPERTIES = ("fill", "stroke", "stop-color")
SHAPE_TAGS = frozenset({"path", "rect", "circle", "polygon", "ellipse", "polyline"})
INHERITING_CONTAINERS = frozenset({"g", "svg"})
NON_RENDERING_TAGS = frozenset(
    {"defs", "clipPath", "mask", "symbol", "pattern", "linearGradient", "radialGradient"}
)
# Never painted, even when referenced (clip-path="url(#..)", mask="url(#..)")
NEVER_PAINTED_TAGS = frozenset({"clipPath", "mask"})

_URL_REF_RE = re.compile(r"url\(\s*['\"]?#([^'\")\s]+)['\"]?\s*\)", re.I)
_CSS_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
_CSS_PAINT_RE = re.compile(r"(?<![\w-])(fill|stroke|stop-color)\s*:\s*([^;}]+)", re.I)


class SvgScanError(ValueError):
    """Raise when a document cannot be parsed as XML/SVG."""


@dataclass(frozen=True)
class SvgColorResult:
    """Colors of one document: canonical (palette order) and raw (discovery order)."""

    colors: Tuple[CanonicalColor, ...]
    raw_colors: Tuple[RGB, ...]
    raw_blues: Tuple[RGB, ...]
    default_fill_inferred: bool = False

    @property
    def raw_color_count(self) -> int:
        return len(self.raw_colors)

    @property
    def raw_blue_count(self) -> int:
        return len(self.raw_blues)

    @property
    def blue_exception_applied(self) -> bool:
        """Light blue sits beside blue because two or more raw blues were split."""
        return CanonicalColor.LIGHT_BLUE in self.colors and self.raw_blue_count >= 2


# ── Small markup helpers ─────────────────────────────────────────────────────
def _local(name: str) -> str:
    """'{http://www.w3.org/2000/svg}rect' -> 'rect'."""
    return name.rsplit("}", 1)[-1]


def parse_style_declarations(style: str) -> Dict[str, str]:
    """Does: Split an inline `style` value into {property: value} (properties lower-cased)."""
    decls: Dict[str, str] = {}
    for chunk in style.split(";"):
        prop, sep, value = chunk.partition(":")
        if sep and prop.strip():
            decls[prop.strip().lower()] = value.strip()
    return decls


def stylesheet_declarations(css: str) -> List[Tuple[str, str]]:
    """Does: Return (property, value) pairs for paint properties found in a `<style>` sheet."""
    css = _CSS_COMMENT_RE.sub(" ", css)
    return [(m.group(1).lower(), m.group(2).strip()) for m in _CSS_PAINT_RE.finditer(css)]


class _Element:
    """Namespace-free view of the attributes the scanner cares about."""

    __slots__ = ("el", "tag", "attrs", "style")

    def __init__(self, el: ET.Element):
        self.el = el
        self.tag = _local(el.tag) if isinstance(el.tag, str) else ""
        self.attrs = {_local(k): v for k, v in el.attrib.items()}
        self.style = parse_style_declarations(self.attrs.get("style", ""))

    def paints(self) -> Iterator[Tuple[str, str]]:
        for prop in PAINT_PROPERTIES:
            if prop in self.attrs:
                yield prop, self.attrs[prop]
            if prop in self.style:
                yield prop, self.style[prop]

    def declares(self, prop: str) -> bool:
        return prop in self.attrs or prop in self.style

    def references(self) -> Iterator[str]:
        """Ids this element paints with (url(#id)) or instantiates (href='#id')."""
        for prop, value in self.paints():
            m = _URL_REF_RE.search(value)
            if m:
                yield m.group(1)
        href = self.attrs.get("href", "")
        if href.startswith("#") and len(href) > 1:
            yield href[1:]


# ── Walk ─────────────────────────────────────────────────────────────────────
class _Scan:
    """Mutable state of one document walk; lives only inside extract_colors_from_svg()."""

    def __init__(self, root: ET.Element):
        self.root = root
        self.ids = {el.get("id"): el for el in root.iter() if el.get("id")}
        self.raw: Dict[RGB, None] = {}
        self.pending: deque[str] = deque()
        self.followed: set[str] = set()
        self.unpainted_shape = False
        self.inheritable_fill = False

    def _collect(self, node: _Element) -> None:
        for prop, value in node.paints():
            rgb = parse_color(value)
            if rgb is not None:
                self.raw.setdefault(rgb, None)
        for ref in node.references():
            if ref not in self.followed:
                self.pending.append(ref)

    def _walk(self, start: ET.Element, *, main_tree: bool) -> None:
        stack = [start]
        while stack:
            el = stack.pop()
            node = _Element(el)
            if node.tag in NON_RENDERING_TAGS and el is not start:
                continue
            if node.tag in NEVER_PAINTED_TAGS:
                continue
            self._collect(node)
            if main_tree:
                if node.tag in INHERITING_CONTAINERS and node.declares("fill"):
                    self.inheritable_fill = True
                elif node.tag in SHAPE_TAGS and not (
                    node.declares("fill") or node.declares("stroke")
                ):
                    self.unpainted_shape = True
            stack.extend(reversed(list(el)))

    def run(self) -> None:
        root_tag = _local(self.root.tag)
        if root_tag in NON_RENDERING_TAGS:
            return
        self._walk(self.root, main_tree=True)
        self._scan_stylesheets()

        while self.pending:
            ref = self.pending.popleft()
            if ref in self.followed:
                continue
            self.followed.add(ref)
            target = self.ids.get(ref)
            if target is None:
                debug(f"dangling reference #{ref}", topic="svg")
                continue
            self._walk(target, main_tree=False)

    def _scan_stylesheets(self) -> None:
        """Paint from `<style>` rules; `url(#id)` values queue their paint server."""
        for el in self.root.iter():
            if isinstance(el.tag, str) and _local(el.tag) == "style" and el.text:
                for prop, value in stylesheet_declarations(el.text):
                    rgb = parse_color(value)
                    if rgb is not None:
                        self.raw.setdefault(rgb, None)
                    for ref in _URL_REF_RE.findall(value):
                        if ref not in self.followed:
                            self.pending.append(ref)
                    if prop == "fill":
                        self.inheritable_fill = True


def _parse_document(text: str) -> ET.Element:
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise SvgScanError(f"Unparseable SVG: {e}") from e


def extract_colors_from_svg(text: str) -> SvgColorResult:
    """
    Does: Scan one SVG document and classify every painted color.
    Returns: SvgColorResult; `colors` is empty when nothing parseable was found.
    Raises: SvgScanError when the text is not well-formed XML.
    """
    if not isinstance(text, str) or not text.strip():
        raise SvgScanError("Empty SVG document")

    scan = _Scan(_parse_document(text))
    scan.run()

    raw_colors = tuple(scan.raw)
    classified = {find_closest_color(rgb) for rgb in raw_colors}

    default_fill = scan.unpainted_shape and not scan.inheritable_fill
    if default_fill:
        classified.add(find_closest_color(DEFAULT_FILL))

    raw_blues = tuple(rgb for rgb in raw_colors if is_blueish(rgb))
    colors = sort_palette_order(apply_blue_exception(classified, raw_blues))

    if not colors:
        logger.info("No colors found in document")
    debug(
        f"raw={len(raw_colors)} blues={len(raw_blues)} default_fill={default_fill} -> "
        f"{[c.value for c in colors]}",
        topic="svg",
    )
    return SvgColorResult(
        colors=colors,
        raw_colors=raw_colors,
        raw_blues=raw_blues,
        default_fill_inferred=default_fill,
    )
