"""Canvas settings: size and background fill."""

from __future__ import annotations

from vectorstudio.models.scene import BACKGROUND_ID
from vectorstudio.svg.parser import find_element, parent_map, read_viewbox, try_parse
from vectorstudio.svg.serializer import format_number, make_element, serialize_svg

# Margin by which the background rect extends past each viewBox edge
BACKGROUND_BLEED = 1000.0


def set_canvas_size(svg_raw: str, width: float, height: float) -> str:
    root = try_parse(svg_raw)
    if root is None or width <= 0 or height <= 0:
        return svg_raw
    w, h = format_number(width), format_number(height)
    root.set("viewBox", f"0 0 {w} {h}")
    root.set("width", w)
    root.set("height", h)

    bg = find_element(root, BACKGROUND_ID)
    if bg is not None:
        _fit_background(root, bg)
    return serialize_svg(root)


def set_background(svg_raw: str, color: str) -> str:
    """Fill the canvas with ``color``; ``none`` removes the background."""
    root = try_parse(svg_raw)
    if root is None:
        return svg_raw

    bg = find_element(root, BACKGROUND_ID)
    if color == "none":
        if bg is None:
            return svg_raw
        parent_map(root)[bg].remove(bg)
        return serialize_svg(root)

    if bg is None:
        bg = make_element("rect", {"id": BACKGROUND_ID})
        root.insert(0, bg)
    _fit_background(root, bg)
    bg.set("fill", color)
    return serialize_svg(root)


def read_background(svg_raw: str) -> str | None:
    root = try_parse(svg_raw)
    bg = find_element(root, BACKGROUND_ID) if root is not None else None
    if bg is None:
        return None
    return bg.get("fill") or "#ffffff"


def _fit_background(root, bg) -> None:
    vb = read_viewbox(root)
    bg.set("x", format_number(vb.x - BACKGROUND_BLEED))
    bg.set("y", format_number(vb.y - BACKGROUND_BLEED))
    bg.set("width", format_number(vb.width + 2 * BACKGROUND_BLEED))
    bg.set("height", format_number(vb.height + 2 * BACKGROUND_BLEED))
