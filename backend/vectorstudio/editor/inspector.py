"""Derived views recomputed from the document text on every read."""

from __future__ import annotations

from vectorstudio.editor.canvas import read_background
from vectorstudio.editor.gradients import gradient_from_element, list_gradients
from vectorstudio.editor.layers import list_layers
from vectorstudio.models.scene import CENTER_TAGS, SceneDocument, StyleState
from vectorstudio.svg import codec
from vectorstudio.svg.parser import find_element, parse_length, read_viewbox, try_parse


def read_style_state(svg_raw: str, node_id: str | None) -> StyleState | None:
    """The style panel values for one node, or None if it does not exist."""
    root = try_parse(svg_raw)
    el = find_element(root, node_id) if root is not None else None
    if el is None:
        return None

    props = codec.element_style(el)

    def value(key: str, default: str) -> str:
        return codec.style_value(el, key, default)

    fill = value("fill", "#000000")
    fill_type, start, end = "solid", "#000000", "#ffffff"
    ref = codec.url_reference(fill)
    if ref:
        gradient_el = find_element(root, ref)
        gradient = gradient_from_element(gradient_el) if gradient_el is not None else None
        if gradient is not None:
            fill_type = gradient.kind
            if len(gradient.stops) >= 2:
                start = gradient.stops[0].color or start
                end = gradient.stops[-1].color or end

    if el.tag in CENTER_TAGS:
        x_raw, y_raw = el.get("cx"), el.get("cy")
    elif el.tag in ("rect", "text", "image"):
        x_raw, y_raw = el.get("x"), el.get("y")
    else:
        x_raw = y_raw = None

    return StyleState(
        node_id=node_id,
        kind=el.tag,
        fill=fill,
        fill_type=fill_type,
        gradient_start=start,
        gradient_end=end,
        fill_opacity=value("fill-opacity", "1"),
        stroke=value("stroke", "none"),
        stroke_width=value("stroke-width", "1"),
        stroke_opacity=value("stroke-opacity", "1"),
        stroke_linecap=value("stroke-linecap", "butt"),
        stroke_linejoin=value("stroke-linejoin", "miter"),
        stroke_dasharray=value("stroke-dasharray", "none"),
        opacity=value("opacity", "1"),
        blend_mode=value("mix-blend-mode", "normal"),
        font_family=value("font-family", "sans-serif"),
        font_size=f"{codec.parse_number(value('font-size', '16'), 16.0):g}",
        font_weight=value("font-weight", "normal"),
        text_content="".join(el.itertext()),
        x=f"{codec.parse_number(x_raw, 0.0):.1f}",
        y=f"{codec.parse_number(y_raw, 0.0):.1f}",
        rx=value("rx", "0"),
        filters=codec.parse_filters(props),
        shadow=codec.parse_shadow(props),
        transform=codec.parse_transform(props),
    )


def describe_document(svg_raw: str) -> SceneDocument | None:
    root = try_parse(svg_raw)
    if root is None:
        return None
    vb = read_viewbox(root)
    return SceneDocument(
        viewbox=vb,
        width=parse_length(root.get("width")) or vb.width,
        height=parse_length(root.get("height")) or vb.height,
        background=read_background(svg_raw),
        layers=list_layers(svg_raw),
        gradients=list_gradients(root),
    )
