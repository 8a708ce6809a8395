"""Scene normalizer — makes raw SVG text safe to edit.

Guarantees on the output:
- an explicit xmlns declaration
- a viewBox (from pixel width/height, else a default square)
- pixel width/height mirroring the viewBox when missing or percentage-based
- a unique, non-empty id on every paintable node

Running it on its own output returns the same text. Input that does not
parse is returned unchanged; callers check ``is_valid_svg`` to flag it.
"""

from __future__ import annotations

import logging

from vectorstudio.svg.parser import (
    iter_paintable,
    parse_length,
    read_viewbox,
    time_suffix,
    try_parse,
)
from vectorstudio.svg.serializer import format_number, serialize_svg

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = 512.0


def normalize_svg(svg_text: str, default_size: float = DEFAULT_CANVAS_SIZE) -> str:
    if not svg_text:
        return ""
    root = try_parse(svg_text)
    if root is None:
        logger.warning("normalize_svg: input is not well-formed SVG, returning unchanged")
        return svg_text

    width = root.get("width")
    height = root.get("height")
    if width is not None and "%" in width:
        width = None
    if height is not None and "%" in height:
        height = None

    if not root.get("viewBox"):
        w_px, h_px = parse_length(width), parse_length(height)
        if w_px and h_px:
            root.set("viewBox", f"0 0 {format_number(w_px)} {format_number(h_px)}")
        else:
            size = format_number(default_size)
            root.set("viewBox", f"0 0 {size} {size}")

    vb = read_viewbox(root)
    if not width:
        root.set("width", format_number(vb.width))
    if not height:
        root.set("height", format_number(vb.height))

    suffix = time_suffix()
    seen: set[str] = set()
    assigned = 0
    for index, el in enumerate(iter_paintable(root)):
        node_id = el.get("id")
        if not node_id or node_id in seen:
            node_id = f"{el.tag}_{index}_{suffix}"
            while node_id in seen:
                node_id = f"{node_id}x"
            el.set("id", node_id)
            assigned += 1
        seen.add(node_id)

    if assigned:
        logger.debug("normalize_svg: assigned %d ids", assigned)
    return serialize_svg(root)
