"""Layer/Z-order operations: reorder, duplicate, delete, hide, align.

Every operation takes the current document text and returns new text; a
target id that does not exist, or names the root or the canvas background,
returns the input unchanged.
"""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from typing import Literal

from vectorstudio.models.edit_ops import AlignEdge
from vectorstudio.models.scene import CENTER_TAGS, PAINTABLE_TAGS, XY_TAGS, LayerInfo
from vectorstudio.svg.parser import (
    find_layer,
    is_background,
    iter_paintable,
    parent_map,
    read_viewbox,
    try_parse,
    unique_id,
)
from vectorstudio.svg.serializer import format_number, serialize_svg
from vectorstudio.utils.geometry import element_bbox

logger = logging.getLogger(__name__)

BOX_ALIGNABLE_TAGS = frozenset({"rect", "image", "circle", "ellipse"})


class UnsupportedAlignment(ValueError):
    """The node kind cannot be aligned to the requested edge."""


def list_layers(svg_raw: str) -> list[LayerInfo]:
    """Paintable nodes, top-most first, without the canvas background."""
    root = try_parse(svg_raw)
    if root is None:
        return []
    layers = [
        LayerInfo(id=el.get("id") or "", kind=el.tag, visible=el.get("display") != "none")
        for el in iter_paintable(root)
        if not is_background(el)
    ]
    layers.reverse()
    return layers


def move_layer(svg_raw: str, node_id: str, direction: Literal["up", "down"]) -> str:
    """Swap paint order with the next ("up") or previous ("down") sibling layer."""
    root = try_parse(svg_raw)
    el = find_layer(root, node_id) if root is not None else None
    if el is None:
        return svg_raw

    parent = parent_map(root)[el]
    siblings = list(parent)
    index = siblings.index(el)
    movable = [
        i for i, sib in enumerate(siblings)
        if sib.tag in PAINTABLE_TAGS and not is_background(sib)
    ]

    if direction == "up":
        candidates = [i for i in movable if i > index]
        target = candidates[0] if candidates else None
    else:
        candidates = [i for i in movable if i < index]
        target = candidates[-1] if candidates else None
    if target is None:
        return svg_raw

    # Tails hold indentation; they stay with the slot, not the node
    other = siblings[target]
    el.tail, other.tail = other.tail, el.tail
    parent.remove(el)
    parent.insert(target, el)
    return serialize_svg(root)


def duplicate_layer(svg_raw: str, node_id: str, offset: float = 10.0) -> tuple[str, str | None]:
    """Deep-clone a node right after the original, shifted by ``offset``."""
    root = try_parse(svg_raw)
    el = find_layer(root, node_id) if root is not None else None
    if el is None:
        return svg_raw, None

    parent = parent_map(root)[el]
    clone = copy.deepcopy(el)
    new_id = assign_fresh_ids(root, clone, "dup")
    offset_node(clone, offset, offset)
    parent.insert(list(parent).index(el) + 1, clone)
    logger.debug("Duplicated %s as %s", node_id, new_id)
    return serialize_svg(root), new_id


def delete_layer(svg_raw: str, node_id: str) -> str:
    root = try_parse(svg_raw)
    el = find_layer(root, node_id) if root is not None else None
    if el is None:
        return svg_raw
    detach(parent_map(root)[el], el)
    return serialize_svg(root)


def toggle_visibility(svg_raw: str, node_id: str) -> str:
    root = try_parse(svg_raw)
    el = find_layer(root, node_id) if root is not None else None
    if el is None:
        return svg_raw
    if el.get("display") == "none":
        del el.attrib["display"]
    else:
        el.set("display", "none")
    return serialize_svg(root)


def align_layer(svg_raw: str, node_id: str, edge: AlignEdge | str) -> str:
    """Move a node so its box edge/center meets the canvas edge/center.

    Boxes come from geometry attributes only (rect/image/circle/ellipse).
    Text can only be centered horizontally; other kinds are unsupported.
    """
    edge = AlignEdge(edge)
    root = try_parse(svg_raw)
    el = find_layer(root, node_id) if root is not None else None
    if el is None:
        return svg_raw

    vb = read_viewbox(root)

    if el.tag == "text":
        if edge is not AlignEdge.CENTER:
            raise UnsupportedAlignment(f"Text nodes only support 'center' alignment, not {edge.value!r}")
        el.set("x", format_number(vb.x + vb.width / 2))
        el.set("text-anchor", "middle")
        return serialize_svg(root)

    if el.tag not in BOX_ALIGNABLE_TAGS:
        raise UnsupportedAlignment(f"Alignment is not supported for <{el.tag}> nodes")

    box = element_bbox(el)
    new_x, new_y = box.x, box.y
    if edge is AlignEdge.LEFT:
        new_x = vb.x
    elif edge is AlignEdge.CENTER:
        new_x = vb.x + (vb.width - box.width) / 2
    elif edge is AlignEdge.RIGHT:
        new_x = vb.x + vb.width - box.width
    elif edge is AlignEdge.TOP:
        new_y = vb.y
    elif edge is AlignEdge.MIDDLE:
        new_y = vb.y + (vb.height - box.height) / 2
    elif edge is AlignEdge.BOTTOM:
        new_y = vb.y + vb.height - box.height

    horizontal = edge in (AlignEdge.LEFT, AlignEdge.CENTER, AlignEdge.RIGHT)
    if el.tag in CENTER_TAGS:
        if horizontal:
            el.set("cx", format_number(new_x + box.width / 2))
        else:
            el.set("cy", format_number(new_y + box.height / 2))
    elif horizontal:
        el.set("x", format_number(new_x))
    else:
        el.set("y", format_number(new_y))
    return serialize_svg(root)


# ── Shared node helpers ────────────────────────────────────────────────────


def offset_node(el: ET.Element, dx: float, dy: float, translate_fallback: bool = True) -> bool:
    """Shift a node by (dx, dy).

    x/y nodes and cx/cy nodes move by attribute; anything else gets a
    ``translate`` appended to its transform attribute when
    ``translate_fallback`` is set. Returns whether the node moved.
    """
    if el.tag in XY_TAGS:
        keys = ("x", "y")
    elif el.tag in CENTER_TAGS:
        keys = ("cx", "cy")
    elif translate_fallback:
        existing = (el.get("transform") or "").strip()
        shift = f"translate({format_number(dx)}, {format_number(dy)})"
        el.set("transform", f"{existing} {shift}".strip())
        return True
    else:
        return False

    for key, delta in zip(keys, (dx, dy)):
        try:
            start = float(el.get(key) or 0)
        except ValueError:
            start = 0.0
        el.set(key, format_number(start + delta))
    return True


def assign_fresh_ids(root: ET.Element, el: ET.Element, prefix: str) -> str:
    """Give a detached subtree new ids so it can join ``root`` without clashes."""
    new_id = unique_id(root, prefix)
    el.set("id", new_id)
    for index, child in enumerate(el.iter()):
        if child is not el and child.get("id"):
            child.set("id", f"{new_id}-{index}")
    return new_id


def detach(parent: ET.Element, el: ET.Element) -> None:
    """Remove ``el`` while keeping any non-whitespace tail text in place."""
    tail = el.tail
    siblings = list(parent)
    index = siblings.index(el)
    parent.remove(el)
    if tail and tail.strip():
        if index > 0:
            prev = siblings[index - 1]
            prev.tail = (prev.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail

