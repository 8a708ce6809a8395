"""Primitive synthesis. New shapes are centered on the canvas.

Every shape is sized from the smaller canvas dimension (one fifth of it),
gets a fresh id and is appended as the top-most node.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from vectorstudio.models.edit_ops import ShapeKind
from vectorstudio.svg.parser import read_viewbox, try_parse, unique_id
from vectorstudio.svg.serializer import format_number as _n
from vectorstudio.svg.serializer import make_element, serialize_svg
from vectorstudio.utils.geometry import format_points, star_points, triangle_points

logger = logging.getLogger(__name__)

SHAPE_FILLS: dict[ShapeKind, str] = {
    ShapeKind.RECT: "#6366f1",
    ShapeKind.CIRCLE: "#ec4899",
    ShapeKind.ELLIPSE: "#8b5cf6",
    ShapeKind.TRIANGLE: "#f59e0b",
    ShapeKind.STAR: "#eab308",
    ShapeKind.HEART: "#ef4444",
    ShapeKind.ARROW: "#3b82f6",
    ShapeKind.BUBBLE: "#10b981",
    ShapeKind.TEXT: "#ffffff",
}

STAR_SPIKES = 5
TEXT_PLACEHOLDER = "Text"


def canvas_metrics(root: ET.Element) -> tuple[float, float, float]:
    """(center_x, center_y, size) for new shapes."""
    vb = read_viewbox(root)
    width = vb.width or 100.0
    height = vb.height or 100.0
    return vb.x + width / 2, vb.y + height / 2, min(width, height) / 5


def create_shape(svg_raw: str, kind: ShapeKind | str) -> tuple[str, str | None]:
    """Append a new primitive. Returns (new document, new node id)."""
    kind = ShapeKind(kind)
    root = try_parse(svg_raw)
    if root is None:
        logger.warning("create_shape: document does not parse, skipping %s", kind.value)
        return svg_raw, None

    cx, cy, size = canvas_metrics(root)
    el = build_shape(kind, cx, cy, size)
    el.set("id", unique_id(root, "shape"))
    root.append(el)
    logger.info("Created %s %s (size %.1f)", kind.value, el.get("id"), size)
    return serialize_svg(root), el.get("id")


def add_image(svg_raw: str, href: str) -> tuple[str, str | None]:
    """Embed an image (usually a data URL) at half the smaller canvas dimension."""
    root = try_parse(svg_raw)
    if root is None:
        return svg_raw, None
    vb = read_viewbox(root)
    width = vb.width or 100.0
    height = vb.height or 100.0
    size = min(width, height) / 2
    el = make_element("image", {
        "href": href,
        "x": _n(vb.x + width / 2 - size / 2),
        "y": _n(vb.y + height / 2 - size / 2),
        "width": _n(size),
        "height": _n(size),
    })
    el.set("id", unique_id(root, "img"))
    root.append(el)
    return serialize_svg(root), el.get("id")


def build_shape(kind: ShapeKind, cx: float, cy: float, size: float) -> ET.Element:
    fill = SHAPE_FILLS[kind]

    if kind is ShapeKind.RECT:
        return make_element("rect", {
            "x": _n(cx - size / 2),
            "y": _n(cy - size / 2),
            "width": _n(size),
            "height": _n(size),
            "fill": fill,
        })
    if kind is ShapeKind.CIRCLE:
        return make_element("circle", {"cx": _n(cx), "cy": _n(cy), "r": _n(size / 2), "fill": fill})
    if kind is ShapeKind.ELLIPSE:
        return make_element("ellipse", {
            "cx": _n(cx), "cy": _n(cy), "rx": _n(size / 1.5), "ry": _n(size / 3), "fill": fill,
        })
    if kind is ShapeKind.TRIANGLE:
        return make_element("polygon", {
            "points": format_points(triangle_points(cx, cy, size)), "fill": fill,
        })
    if kind is ShapeKind.STAR:
        points = star_points(cx, cy, outer=size / 2, inner=size / 5, spikes=STAR_SPIKES)
        return make_element("polygon", {"points": format_points(points), "fill": fill})
    if kind is ShapeKind.HEART:
        return make_element("path", {"d": heart_path(cx, cy, size), "fill": fill})
    if kind is ShapeKind.ARROW:
        return make_element("path", {"d": arrow_path(cx, cy, size), "fill": fill})
    if kind is ShapeKind.BUBBLE:
        return make_element("path", {"d": bubble_path(cx, cy, size), "fill": fill})
    if kind is ShapeKind.TEXT:
        return make_element(
            "text",
            {
                "x": _n(cx),
                "y": _n(cy),
                "text-anchor": "middle",
                "dominant-baseline": "middle",
                "fill": fill,
                "font-size": _n(size / 2),
            },
            text=TEXT_PLACEHOLDER,
        )
    raise ValueError(f"Unsupported shape kind: {kind!r}")


def heart_path(cx: float, cy: float, size: float) -> str:
    s = size
    bottom = f"{_n(cx)} {_n(cy + s * 0.3)}"
    notch = f"{_n(cx)} {_n(cy - s * 0.3)}"
    return (
        f"M{bottom} "
        f"C{bottom} {_n(cx - s * 0.6)} {_n(cy - s * 0.3)} {_n(cx - s * 0.3)} {_n(cy - s * 0.6)} "
        f"C{_n(cx - s * 0.1)} {_n(cy - s * 0.8)} {notch} {notch} "
        f"C{notch} {_n(cx + s * 0.1)} {_n(cy - s * 0.8)} {_n(cx + s * 0.3)} {_n(cy - s * 0.6)} "
        f"C{_n(cx + s * 0.6)} {_n(cy - s * 0.3)} {bottom} {bottom} Z"
    )


def arrow_path(cx: float, cy: float, size: float) -> str:
    w, h = size, size / 2
    pts = [
        (cx - w / 2, cy - h / 4),
        (cx + w / 4, cy - h / 4),
        (cx + w / 4, cy - h / 2),
        (cx + w / 2, cy),
        (cx + w / 4, cy + h / 2),
        (cx + w / 4, cy + h / 4),
        (cx - w / 2, cy + h / 4),
    ]
    head, *rest = pts
    return f"M{_n(head[0])} {_n(head[1])} " + " ".join(f"L{_n(x)} {_n(y)}" for x, y in rest) + " Z"


def bubble_path(cx: float, cy: float, size: float) -> str:
    w, h = size, size * 0.8
    return (
        f"M{_n(cx - w / 2)},{_n(cy - h / 2)} h{_n(w)} v{_n(h * 0.7)} h-{_n(w / 2)} "
        f"l-{_n(w / 4)},{_n(h * 0.3)} v-{_n(h * 0.3)} h-{_n(w / 4)} z"
    )
