"""Pointer gestures — transform handles and direct move.

Each gesture is a small state machine (idle -> dragging -> idle) that keeps
its start-of-gesture values in a GestureContext. ``update`` returns a live
preview document and never touches history; the owning session commits
once when the gesture ends.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from vectorstudio.editor.config import EditorConfig
from vectorstudio.models.edit_ops import Handle
from vectorstudio.models.scene import CENTER_TAGS, BoundingBox, TransformState
from vectorstudio.svg import codec
from vectorstudio.svg.parser import find_element, find_layer, read_viewbox, try_parse
from vectorstudio.svg.serializer import format_number, serialize_svg
from vectorstudio.utils.geometry import element_bbox, pointer_angle

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Nodes a pointer drag can move by rewriting x/y or cx/cy
MOVABLE_TAGS = frozenset({"rect", "image", "text", "circle", "ellipse"})


class GestureState(str, enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class GestureContext:
    """Everything captured on pointer-down, read on every pointer-move."""

    node_id: str
    origin: Point  # pointer position in screen space
    zoom: float = 1.0
    handle: Handle | None = None
    center: Point = (0.0, 0.0)  # box center in screen space
    bbox: BoundingBox = field(default_factory=BoundingBox)
    start_transform: TransformState = field(default_factory=TransformState)
    start_position: Point = (0.0, 0.0)
    position_attrs: tuple[str, str] = ("x", "y")

    def canvas_delta(self, pointer: Point) -> Point:
        zoom = self.zoom or 1.0
        return ((pointer[0] - self.origin[0]) / zoom, (pointer[1] - self.origin[1]) / zoom)


class TransformGesture:
    """Rotate / scale / skew driven by one of the nine selection handles."""

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()
        self.state = GestureState.IDLE
        self.context: GestureContext | None = None

    @property
    def active(self) -> bool:
        return self.state is GestureState.DRAGGING

    def begin(
        self,
        svg_raw: str,
        node_id: str,
        handle: Handle | str,
        pointer: Point,
        zoom: float = 1.0,
        canvas_origin: Point = (0.0, 0.0),
    ) -> bool:
        """Capture box, transform and pointer origin. False if the node is gone.

        ``canvas_origin`` is the screen position of the viewBox top-left corner;
        the rotation center is the box center mapped through it and ``zoom``.
        """
        root = try_parse(svg_raw)
        el = find_layer(root, node_id) if root is not None else None
        if el is None:
            return False
        box = element_bbox(el) or BoundingBox()
        vb = read_viewbox(root)
        bx, by = box.center[0] - vb.x, box.center[1] - vb.y
        self.context = GestureContext(
            node_id=node_id,
            origin=pointer,
            zoom=zoom,
            handle=Handle(handle),
            center=(canvas_origin[0] + bx * zoom, canvas_origin[1] + by * zoom),
            bbox=box,
            start_transform=codec.parse_transform(el.get("style")),
        )
        self.state = GestureState.DRAGGING
        logger.debug("Transform gesture on %s via %s", node_id, self.context.handle.value)
        return True

    def compute(self, pointer: Point, modifier: bool = False) -> TransformState:
        """The live TransformState for the current pointer position."""
        ctx = self.context
        if ctx is None:
            raise RuntimeError("No transform gesture in progress")
        start = ctx.start_transform
        new = start.model_copy()

        if ctx.handle is Handle.ROTATE:
            delta = pointer_angle(ctx.center, pointer) - pointer_angle(ctx.center, ctx.origin)
            new.rotate = (start.rotate + delta) % 360
            if new.rotate >= 360:
                new.rotate = 0.0
            return new

        dx, dy = ctx.canvas_delta(pointer)
        width = ctx.bbox.width or self.config.fallback_box_size
        height = ctx.bbox.height or self.config.fallback_box_size
        scale_gain, skew_gain = self.config.scale_gain, self.config.skew_gain
        sx, sy = start.signed_scale
        handle = ctx.handle.value

        if "n" in handle:
            if modifier:
                new.skew_x = start.skew_x + dx * skew_gain
            else:
                sy = sy - (dy / height) * scale_gain
        if "s" in handle:
            if modifier:
                new.skew_x = start.skew_x - dx * skew_gain
            else:
                sy = sy + (dy / height) * scale_gain
        if "w" in handle:
            if modifier:
                new.skew_y = start.skew_y + dy * skew_gain
            else:
                sx = sx - (dx / width) * scale_gain
        if "e" in handle:
            if modifier:
                new.skew_y = start.skew_y - dy * skew_gain
            else:
                sx = sx + (dx / width) * scale_gain

        new.scale_x, new.flip_x = abs(sx), sx < 0
        new.scale_y, new.flip_y = abs(sy), sy < 0
        return new

    def update(self, svg_raw: str, pointer: Point, modifier: bool = False) -> str:
        """Write the live transform into the document (preview only)."""
        if not self.active:
            return svg_raw
        state = self.compute(pointer, modifier)
        root = try_parse(svg_raw)
        el = find_element(root, self.context.node_id) if root is not None else None
        if el is None:
            return svg_raw
        props = codec.element_style(el)
        codec.write_style(el, codec.apply_transform_style(props, state))
        return serialize_svg(root)

    def end(self) -> GestureContext | None:
        ctx, self.context = self.context, None
        self.state = GestureState.IDLE
        return ctx


class MoveGesture:
    """Drag a node body to reposition it."""

    def __init__(self) -> None:
        self.state = GestureState.IDLE
        self.context: GestureContext | None = None

    @property
    def active(self) -> bool:
        return self.state is GestureState.DRAGGING

    def begin(self, svg_raw: str, node_id: str, pointer: Point, zoom: float = 1.0) -> bool:
        """Start dragging. False for missing nodes and kinds that cannot move."""
        root = try_parse(svg_raw)
        el = find_layer(root, node_id) if root is not None else None
        if el is None or el.tag not in MOVABLE_TAGS:
            return False

        attrs = ("cx", "cy") if el.tag in CENTER_TAGS else ("x", "y")
        self.context = GestureContext(
            node_id=node_id,
            origin=pointer,
            zoom=zoom,
            start_position=(
                codec.parse_number(el.get(attrs[0]), 0.0),
                codec.parse_number(el.get(attrs[1]), 0.0),
            ),
            position_attrs=attrs,
        )
        self.state = GestureState.DRAGGING
        return True

    def update(self, svg_raw: str, pointer: Point) -> str:
        if not self.active:
            return svg_raw
        ctx = self.context
        root = try_parse(svg_raw)
        el = find_element(root, ctx.node_id) if root is not None else None
        if el is None:
            return svg_raw
        dx, dy = ctx.canvas_delta(pointer)
        el.set(ctx.position_attrs[0], format_number(ctx.start_position[0] + dx))
        el.set(ctx.position_attrs[1], format_number(ctx.start_position[1] + dy))
        return serialize_svg(root)

    def end(self) -> GestureContext | None:
        ctx, self.context = self.context, None
        self.state = GestureState.IDLE
        return ctx
