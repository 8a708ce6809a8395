"""SVG document loader — facade over xml.etree.

Every editing operation reparses the current document text with
``parse_document`` and writes back through ``serializer.serialize_svg``.
SVG-namespace tags are stripped on load so lookups use plain tag names
("rect", "circle", ...); the namespace is re-declared as a plain ``xmlns``
attribute on the root.
"""

from __future__ import annotations

import itertools
import logging
import re
import time
import xml.etree.ElementTree as ET
from collections.abc import Iterator

import numpy as np

from vectorstudio.models.scene import (
    BACKGROUND_ID,
    PAINTABLE_TAGS,
    SVG_NS,
    XLINK_NS,
    ViewBox,
)

logger = logging.getLogger(__name__)

ET.register_namespace("xlink", XLINK_NS)

_SVG_PREFIX = "{" + SVG_NS + "}"
_NUMBER_SPLIT_RE = re.compile(r"[\s,]+")
_PX_RE = re.compile(r"^\s*(-?[\d.]+(?:e-?\d+)?)\s*(?:px|pt)?\s*$", re.IGNORECASE)

_id_counter = itertools.count(1)


class ParseFailure(ValueError):
    """Document text is not a well-formed SVG document."""


def parse_document(svg_text: str) -> ET.Element:
    """Parse SVG text into an element tree rooted at <svg>.

    Raises ParseFailure for malformed markup or a non-svg root.
    """
    try:
        root = ET.fromstring(svg_text.strip())
    except ET.ParseError as e:
        raise ParseFailure(str(e)) from e

    for el in root.iter():
        if isinstance(el.tag, str):
            el.tag = _strip_ns(el.tag)

    if root.tag != "svg":
        raise ParseFailure(f"Root element is <{root.tag}>, expected <svg>")

    # Keep xmlns as the first root attribute so output is stable across reparses
    attrs = {"xmlns": SVG_NS}
    attrs.update((k, v) for k, v in root.attrib.items() if k != "xmlns")
    root.attrib.clear()
    root.attrib.update(attrs)
    return root


def try_parse(svg_text: str) -> ET.Element | None:
    """Parse, returning None instead of raising on bad input."""
    if not svg_text:
        return None
    try:
        return parse_document(svg_text)
    except ParseFailure as e:
        logger.debug("SVG parse failed: %s", e)
        return None


def is_valid_svg(svg_text: str) -> bool:
    return try_parse(svg_text) is not None


def parse_fragment(fragment: str) -> ET.Element:
    """Parse a single serialized node (clipboard payload)."""
    try:
        el = ET.fromstring(fragment)
    except ET.ParseError as e:
        raise ParseFailure(str(e)) from e
    for node in el.iter():
        if isinstance(node.tag, str):
            node.tag = _strip_ns(node.tag)
    return el


def _strip_ns(tag: str) -> str:
    return tag[len(_SVG_PREFIX):] if tag.startswith(_SVG_PREFIX) else tag


# ── Lookups ────────────────────────────────────────────────────────────────


def find_element(root: ET.Element, node_id: str | None) -> ET.Element | None:
    if not node_id:
        return None
    for el in root.iter():
        if el.get("id") == node_id:
            return el
    return None


def find_layer(root: ET.Element, node_id: str | None) -> ET.Element | None:
    """Like find_element, but never the root or the canvas background."""
    el = find_element(root, node_id)
    if el is None or el is root or is_background(el):
        return None
    return el


def parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    return {child: parent for parent in root.iter() for child in parent}


def iter_paintable(root: ET.Element) -> Iterator[ET.Element]:
    """Paintable descendants of the root, in document (paint) order."""
    for el in root.iter():
        if el is not root and el.tag in PAINTABLE_TAGS:
            yield el


def is_background(el: ET.Element) -> bool:
    return el.get("id") == BACKGROUND_ID


def element_ids(root: ET.Element) -> set[str]:
    return {el.get("id") for el in root.iter() if el.get("id")}


def unique_id(root: ET.Element, prefix: str) -> str:
    """A fresh id of the form ``<prefix>-<time>`` not used in the document."""
    taken = element_ids(root)
    candidate = f"{prefix}-{time_suffix()}"
    while candidate in taken:
        candidate = f"{prefix}-{time_suffix()}-{next(_id_counter)}"
    return candidate


def time_suffix(length: int = 5) -> str:
    """Last ``length`` base-36 digits of the current time in milliseconds."""
    stamp = np.base_repr(int(time.time() * 1000), base=36).lower()
    return stamp[-length:]


# ── Canvas geometry ────────────────────────────────────────────────────────


def parse_length(value: str | None) -> float | None:
    """Parse a pixel length ("24", "24px", "24pt"); percentages and junk give None."""
    if not value:
        return None
    m = _PX_RE.match(value)
    if not m:
        return None
    try:
        return float(m.group(1))
    except ValueError:
        return None


def read_viewbox(root: ET.Element) -> ViewBox:
    """Read the canvas box: viewBox first, then width/height, then 100×100."""
    vb = root.get("viewBox")
    if vb:
        parts = [p for p in _NUMBER_SPLIT_RE.split(vb.strip()) if p]
        if len(parts) >= 4:
            try:
                x, y, w, h = (float(p) for p in parts[:4])
                return ViewBox(x=x, y=y, width=w, height=h)
            except ValueError:
                logger.warning("Unparseable viewBox %r, falling back to width/height", vb)

    w = parse_length(root.get("width"))
    h = parse_length(root.get("height"))
    return ViewBox(width=w or 100.0, height=h or 100.0)
