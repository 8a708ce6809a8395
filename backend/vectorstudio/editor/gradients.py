"""Solid fills and two-stop gradient definitions.

Each gradient edit creates a brand-new definition; definitions that no node
references any more are left in <defs>.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from vectorstudio.models.edit_ops import PropertyKey
from vectorstudio.models.scene import GradientDefinition, GradientStop
from vectorstudio.svg import codec
from vectorstudio.svg.edit_applier import set_property
from vectorstudio.svg.parser import find_element, is_background, try_parse, unique_id
from vectorstudio.svg.serializer import make_element, serialize_svg

logger = logging.getLogger(__name__)

GRADIENT_TAGS = {"linear": "linearGradient", "radial": "radialGradient"}
_KIND_BY_TAG = {tag: kind for kind, tag in GRADIENT_TAGS.items()}


def set_solid(svg_raw: str, node_id: str, color: str | None = None) -> str:
    """Drop the inline fill override; with ``color``, write it as the new fill."""
    root = try_parse(svg_raw)
    el = find_element(root, node_id) if root is not None else None
    if el is None:
        return svg_raw

    props = codec.element_style(el)
    props.pop("fill", None)
    codec.write_style(el, props)
    if color is not None:
        set_property(el, PropertyKey.FILL, color)
    return serialize_svg(root)


def set_gradient(
    svg_raw: str, node_id: str, kind: str, start: str, end: str
) -> tuple[str, str | None]:
    """Point the node's fill at a new two-stop gradient. Returns (document, gradient id)."""
    if kind not in GRADIENT_TAGS:
        raise ValueError(f"Unknown gradient kind: {kind!r}")
    root = try_parse(svg_raw)
    el = find_element(root, node_id) if root is not None else None
    if el is None or is_background(el):
        return svg_raw, None

    defs = ensure_defs(root)
    grad_id = unique_id(root, "grad")
    gradient = make_element(GRADIENT_TAGS[kind], {"id": grad_id})
    gradient.append(make_element("stop", {"offset": "0%", "stop-color": start}))
    gradient.append(make_element("stop", {"offset": "100%", "stop-color": end}))
    defs.append(gradient)

    # An inline fill would shadow the url() reference
    props = codec.element_style(el)
    props.pop("fill", None)
    codec.write_style(el, props)
    el.set("fill", f"url(#{grad_id})")

    logger.debug("Gradient %s (%s) applied to %s", grad_id, kind, node_id)
    return serialize_svg(root), grad_id


def ensure_defs(root: ET.Element) -> ET.Element:
    defs = root.find("defs")
    if defs is None:
        defs = ET.Element("defs")
        root.insert(0, defs)
    return defs


def gradient_from_element(el: ET.Element) -> GradientDefinition | None:
    kind = _KIND_BY_TAG.get(el.tag)
    if kind is None:
        return None
    stops = [
        GradientStop(offset=stop.get("offset", ""), color=stop.get("stop-color", ""))
        for stop in el.iter("stop")
    ]
    return GradientDefinition(id=el.get("id", ""), kind=kind, stops=stops)


def read_gradient(svg_raw: str, gradient_id: str) -> GradientDefinition | None:
    root = try_parse(svg_raw)
    el = find_element(root, gradient_id) if root is not None else None
    return gradient_from_element(el) if el is not None else None


def list_gradients(root: ET.Element) -> list[GradientDefinition]:
    found = (gradient_from_element(el) for el in root.iter() if el.tag in _KIND_BY_TAG)
    return [g for g in found if g is not None]
