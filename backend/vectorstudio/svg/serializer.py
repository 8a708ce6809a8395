"""Write SVG markup from an element tree."""

from __future__ import annotations

import xml.etree.ElementTree as ET


def serialize_svg(root: ET.Element) -> str:
    """Serialize the whole document. No XML declaration is emitted."""
    return ET.tostring(root, encoding="unicode")


def serialize_fragment(el: ET.Element) -> str:
    """Serialize one node and its subtree, without its trailing whitespace."""
    tail, el.tail = el.tail, None
    try:
        return ET.tostring(el, encoding="unicode")
    finally:
        el.tail = tail


def format_number(value: float, precision: int = 3) -> str:
    """Compact decimal: 40.0 -> "40", 12.3456 -> "12.346", -0.0 -> "0"."""
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def make_element(tag: str, attrs: dict[str, str], text: str | None = None) -> ET.Element:
    """Build a node with attributes in the given order."""
    el = ET.Element(tag)
    for k, v in attrs.items():
        el.set(k, v)
    if text is not None:
        el.text = text
    return el
