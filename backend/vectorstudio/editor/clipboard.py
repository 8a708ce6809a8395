"""Single-slot clipboard for one node's serialized subtree."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vectorstudio.editor.layers import assign_fresh_ids, offset_node
from vectorstudio.svg.parser import ParseFailure, find_layer, parse_fragment, try_parse
from vectorstudio.svg.serializer import serialize_fragment, serialize_svg

logger = logging.getLogger(__name__)


@dataclass
class ClipboardEntry:
    fragment: str
    kind: str


class Clipboard:
    """Holds at most one entry. Copy/cut overwrite it; paste leaves it in place."""

    def __init__(self) -> None:
        self.entry: ClipboardEntry | None = None

    @property
    def is_empty(self) -> bool:
        return self.entry is None

    def copy(self, svg_raw: str, node_id: str) -> bool:
        root = try_parse(svg_raw)
        el = find_layer(root, node_id) if root is not None else None
        if el is None:
            return False
        self.entry = ClipboardEntry(fragment=serialize_fragment(el), kind=el.tag)
        return True

    def paste(self, svg_raw: str, offset: float = 10.0) -> tuple[str, str | None]:
        """Append a shifted copy of the entry as the top-most node."""
        if self.entry is None:
            return svg_raw, None
        root = try_parse(svg_raw)
        if root is None:
            return svg_raw, None
        try:
            el = parse_fragment(self.entry.fragment)
        except ParseFailure as e:
            logger.warning("Clipboard entry does not parse: %s", e)
            return svg_raw, None

        new_id = assign_fresh_ids(root, el, "paste")
        offset_node(el, offset, offset)
        root.append(el)
        return serialize_svg(root), new_id
