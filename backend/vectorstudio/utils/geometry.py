"""Leaf-node geometry helpers. No editor imports."""

from __future__ import annotations

import logging
import math
import re
import xml.etree.ElementTree as ET

import numpy as np
from numpy.typing import NDArray
from svgpathtools import parse_path

from vectorstudio.models.scene import BoundingBox
from vectorstudio.svg.serializer import format_number

logger = logging.getLogger(__name__)

_POINTS_SPLIT_RE = re.compile(r"[\s,]+")

# Average glyph advance relative to font size, for text box estimates
_GLYPH_ASPECT = 0.6


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def star_points(
    cx: float, cy: float, outer: float, inner: float, spikes: int = 5
) -> NDArray[np.float64]:
    """Vertices alternating outer/inner radius, first vertex pointing up."""
    i = np.arange(spikes * 2)
    radii = np.where(i % 2 == 0, outer, inner)
    angles = (np.pi / spikes) * i - np.pi / 2
    return np.column_stack((cx + np.cos(angles) * radii, cy + np.sin(angles) * radii))


def triangle_points(cx: float, cy: float, size: float) -> NDArray[np.float64]:
    """Equilateral triangle with side ``size``, apex up, centered on (cx, cy)."""
    h = size * math.sqrt(3) / 2
    return np.array([
        [cx, cy - h / 2],
        [cx - size / 2, cy + h / 2],
        [cx + size / 2, cy + h / 2],
    ])


def format_points(points: NDArray[np.float64]) -> str:
    return " ".join(f"{format_number(x)},{format_number(y)}" for x, y in points)


def parse_points(text: str | None) -> NDArray[np.float64]:
    """Parse a polygon/polyline points list; trailing odd values are dropped."""
    values: list[float] = []
    for part in _POINTS_SPLIT_RE.split((text or "").strip()):
        if not part:
            continue
        try:
            values.append(float(part))
        except ValueError:
            logger.debug("Skipping bad point value %r", part)
    if len(values) % 2:
        values = values[:-1]
    return np.array(values, dtype=np.float64).reshape(-1, 2)


def pointer_angle(center: tuple[float, float], point: tuple[float, float]) -> float:
    """Angle in degrees from ``center`` to ``point`` (screen coordinates, y down)."""
    return math.degrees(math.atan2(point[1] - center[1], point[0] - center[0]))


def _num(el: ET.Element, attr: str, default: float = 0.0) -> float:
    try:
        return float(el.get(attr) or default)
    except ValueError:
        return default


def element_bbox(el: ET.Element) -> BoundingBox | None:
    """Bounding box of a node's own geometry attributes, transforms ignored.

    Returns None when the node has no geometry we can read.
    """
    tag = el.tag
    if tag in ("rect", "image"):
        return BoundingBox(
            x=_num(el, "x"), y=_num(el, "y"), width=_num(el, "width"), height=_num(el, "height")
        )
    if tag == "circle":
        r = _num(el, "r")
        return BoundingBox(x=_num(el, "cx") - r, y=_num(el, "cy") - r, width=2 * r, height=2 * r)
    if tag == "ellipse":
        rx, ry = _num(el, "rx"), _num(el, "ry")
        return BoundingBox(x=_num(el, "cx") - rx, y=_num(el, "cy") - ry, width=2 * rx, height=2 * ry)
    if tag == "line":
        pts = np.array([[_num(el, "x1"), _num(el, "y1")], [_num(el, "x2"), _num(el, "y2")]])
        return _from_extent(bbox(pts))
    if tag in ("polygon", "polyline"):
        pts = parse_points(el.get("points"))
        return _from_extent(bbox(pts)) if len(pts) else None
    if tag == "path":
        d = el.get("d")
        if not d:
            return None
        try:
            xmin, xmax, ymin, ymax = parse_path(d).bbox()
        except Exception as e:
            logger.warning("Failed to measure path %s: %s", el.get("id"), e)
            return None
        return BoundingBox(x=xmin, y=ymin, width=xmax - xmin, height=ymax - ymin)
    if tag == "text":
        size = _num(el, "font-size", 16.0)
        width = size * _GLYPH_ASPECT * len("".join(el.itertext()))
        x, y = _num(el, "x"), _num(el, "y")
        if el.get("text-anchor") == "middle":
            x -= width / 2
        return BoundingBox(x=x, y=y - size, width=width, height=size)
    if tag == "g":
        boxes = [b for b in (element_bbox(child) for child in el) if b is not None]
        if not boxes:
            return None
        extent = np.array([[b.x, b.y, b.x + b.width, b.y + b.height] for b in boxes])
        return _from_extent((
            float(extent[:, 0].min()),
            float(extent[:, 1].min()),
            float(extent[:, 2].max()),
            float(extent[:, 3].max()),
        ))
    return None


def _from_extent(extent: tuple[float, float, float, float]) -> BoundingBox:
    xmin, ymin, xmax, ymax = extent
    return BoundingBox(x=xmin, y=ymin, width=xmax - xmin, height=ymax - ymin)
