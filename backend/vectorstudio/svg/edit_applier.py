"""Property edit applier — applies one property change to one node.

The document is reparsed, the node's attribute and/or inline style is
updated according to the property's category, and the whole document is
re-serialized. A target id that no longer exists is a silent no-op: the
input text comes back unchanged.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from vectorstudio.models.edit_ops import (
    FILTER_KEYS,
    GEOMETRY_KEYS,
    PAINT_KEYS,
    TRANSFORM_KEYS,
    PropertyEdit,
    PropertyKey,
    PropertyValue,
)
from vectorstudio.models.scene import CENTER_TAGS
from vectorstudio.svg import codec
from vectorstudio.svg.parser import find_element, try_parse
from vectorstudio.svg.serializer import format_number, serialize_svg

logger = logging.getLogger(__name__)

# Filter keys that map straight onto a FilterState / ShadowState field
_FILTER_FIELDS = {
    PropertyKey.BLUR: "blur",
    PropertyKey.GRAYSCALE: "grayscale",
    PropertyKey.SEPIA: "sepia",
    PropertyKey.INVERT: "invert",
    PropertyKey.SATURATE: "saturate",
    PropertyKey.HUE_ROTATE: "hue_rotate",
}
_SHADOW_FIELDS = {
    PropertyKey.SHADOW_X: "x",
    PropertyKey.SHADOW_Y: "y",
    PropertyKey.SHADOW_BLUR: "blur",
    PropertyKey.SHADOW_OPACITY: "opacity",
}


class UnknownProperty(ValueError):
    """The property key is not one the editor knows how to write."""


def coerce_key(key: PropertyKey | str) -> PropertyKey:
    try:
        return PropertyKey(key)
    except ValueError as e:
        raise UnknownProperty(f"Unknown property key: {key!r}") from e


def apply_property(svg_raw: str, node_id: str, key: PropertyKey | str, value: PropertyValue) -> str:
    """Apply one property change, returning the new document text."""
    prop = coerce_key(key)
    root = try_parse(svg_raw)
    if root is None:
        logger.warning("apply_property: document does not parse, skipping %s", prop.value)
        return svg_raw
    el = find_element(root, node_id)
    if el is None:
        logger.debug("apply_property: unknown target %r, skipping", node_id)
        return svg_raw

    set_property(el, prop, value)
    return serialize_svg(root)


def apply_edits(svg_raw: str, edits: list[PropertyEdit]) -> str:
    """Apply a batch of property edits in order with a single reparse."""
    root = try_parse(svg_raw)
    if root is None:
        return svg_raw

    changed = False
    for edit in edits:
        el = find_element(root, edit.target)
        if el is None:
            logger.debug("apply_edits: unknown target %r, skipping", edit.target)
            continue
        set_property(el, coerce_key(edit.key), edit.value)
        changed = True

    return serialize_svg(root) if changed else svg_raw


def set_property(el: ET.Element, prop: PropertyKey, value: PropertyValue) -> None:
    """Dispatch by property category and mutate ``el`` in place."""
    if prop in GEOMETRY_KEYS:
        _set_geometry(el, prop, value)
    elif prop in PAINT_KEYS:
        _set_paint(el, prop.value, _as_text(value))
    elif prop in TRANSFORM_KEYS:
        _set_transform(el, prop, value)
    elif prop in FILTER_KEYS:
        _set_filter(el, prop, value)
    elif prop is PropertyKey.BLEND_MODE:
        _set_blend_mode(el, _as_text(value))
    elif prop is PropertyKey.TEXT_CONTENT:
        _set_text(el, value if isinstance(value, str) else _as_text(value))
    else:
        raise UnknownProperty(f"Unhandled property key: {prop.value!r}")


def _as_text(value: PropertyValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(float(value))
    return str(value).strip()


# ── Categories ─────────────────────────────────────────────────────────────


def _set_geometry(el: ET.Element, prop: PropertyKey, value: PropertyValue) -> None:
    text = _as_text(value)
    tag = el.tag

    if prop in (PropertyKey.X, PropertyKey.Y):
        attr = prop.value
        if tag in CENTER_TAGS:
            attr = "c" + attr
        el.set(attr, text)
    elif prop is PropertyKey.RADIUS:
        if tag == "circle":
            el.set("r", text)
        elif tag == "ellipse":
            el.set("rx", text)
            el.set("ry", text)
        else:
            logger.debug("radius edit ignored on <%s>", tag)
    elif prop is PropertyKey.CORNER_RADIUS:
        el.set("rx", text)
        if tag == "rect":
            el.set("ry", text)
    else:
        el.set(prop.value, text)


def _set_paint(el: ET.Element, key: str, value: str) -> None:
    """Write both the attribute and the inline style (the style wins when rendered)."""
    props = codec.element_style(el)

    if value == "none" and key == "stroke-dasharray":
        el.attrib.pop(key, None)
    else:
        el.set(key, value)

    if value == "none" and key in ("stroke-dasharray", "stroke"):
        props.pop(key, None)
    else:
        props[key] = value
    codec.write_style(el, props)


def _set_transform(el: ET.Element, prop: PropertyKey, value: PropertyValue) -> None:
    props = codec.element_style(el)
    state = codec.parse_transform(props)

    if prop is PropertyKey.ROTATE:
        state.rotate = codec.parse_number(value, 0.0)
    elif prop is PropertyKey.SCALE:
        magnitude = abs(codec.parse_number(value, 1.0))
        state.scale_x = state.scale_y = magnitude
    elif prop is PropertyKey.SCALE_X:
        signed = codec.parse_number(value, 1.0)
        state.scale_x, state.flip_x = abs(signed), signed < 0
    elif prop is PropertyKey.SCALE_Y:
        signed = codec.parse_number(value, 1.0)
        state.scale_y, state.flip_y = abs(signed), signed < 0
    elif prop is PropertyKey.SKEW_X:
        state.skew_x = codec.parse_number(value, 0.0)
    elif prop is PropertyKey.SKEW_Y:
        state.skew_y = codec.parse_number(value, 0.0)
    elif prop is PropertyKey.FLIP_X:
        state.flip_x = codec.parse_bool(value)
    elif prop is PropertyKey.FLIP_Y:
        state.flip_y = codec.parse_bool(value)

    codec.write_style(el, codec.apply_transform_style(props, state))


def _set_filter(el: ET.Element, prop: PropertyKey, value: PropertyValue) -> None:
    """Rebuild the whole filter chain from the current state plus this change."""
    props = codec.element_style(el)
    filters = codec.parse_filters(props)
    shadow = codec.parse_shadow(props)

    if prop in _FILTER_FIELDS:
        field = _FILTER_FIELDS[prop]
        setattr(filters, field, codec.parse_number(value, getattr(codec.NEUTRAL_FILTERS, field)))
    elif prop is PropertyKey.SHADOW:
        shadow.enabled = codec.parse_bool(value)
    elif prop in _SHADOW_FIELDS:
        field = _SHADOW_FIELDS[prop]
        setattr(shadow, field, codec.parse_number(value, getattr(shadow, field)))
    elif prop is PropertyKey.SHADOW_COLOR:
        shadow.color = codec.to_hex(_as_text(value))

    codec.write_style(el, codec.apply_filter_style(props, filters, shadow))


def _set_blend_mode(el: ET.Element, mode: str) -> None:
    props = codec.element_style(el)
    props.pop("mix-blend-mode", None)
    if mode and mode != "normal":
        props["mix-blend-mode"] = mode
    codec.write_style(el, props)


def _set_text(el: ET.Element, content: str) -> None:
    for child in list(el):
        el.remove(child)
    el.text = content
