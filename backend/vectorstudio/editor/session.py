"""Editor session: document text, selection, history, clipboard and gestures.

Every mutating call computes new text with one of the pure document
functions and pushes it through ``_commit``. Gesture previews go through
``_preview`` instead and are committed once when the pointer is released.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal

from vectorstudio.editor import canvas, gradients, layers
from vectorstudio.editor.clipboard import Clipboard
from vectorstudio.editor.config import EditorConfig
from vectorstudio.editor.gestures import MoveGesture, Point, TransformGesture
from vectorstudio.editor.history import HistoryLog
from vectorstudio.editor.inspector import describe_document, read_style_state
from vectorstudio.models.edit_ops import AlignEdge, Handle, PropertyEdit, PropertyKey, PropertyValue, ShapeKind
from vectorstudio.models.scene import PAINTABLE_TAGS, SVG_NS, SceneDocument, StyleState
from vectorstudio.svg import primitives
from vectorstudio.svg.edit_applier import apply_edits, apply_property
from vectorstudio.svg.normalizer import normalize_svg
from vectorstudio.svg.parser import ParseFailure, find_element, find_layer, parse_document, try_parse
from vectorstudio.svg.serializer import format_number, serialize_svg

logger = logging.getLogger(__name__)

DocumentListener = Callable[[str], None]


def blank_document(size: float) -> str:
    s = format_number(size)
    return (
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 {s} {s}" '
        f'width="{s}" height="{s}"></svg>'
    )


class EditorSession:
    def __init__(self, svg_text: str | None = None, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig.from_settings()
        self.document = ""
        self.history = HistoryLog()
        self.selection: str | None = None
        self.clipboard = Clipboard()
        self.validation_error: str | None = None
        self.transform_gesture = TransformGesture(self.config)
        self.move_gesture = MoveGesture()
        self._listeners: list[DocumentListener] = []

        if not self.load(svg_text or blank_document(self.config.default_canvas_size)):
            error = self.validation_error
            self.load(blank_document(self.config.default_canvas_size))
            self.validation_error = error

    # ── Document lifecycle ─────────────────────────────────────────────────

    def add_listener(self, listener: DocumentListener) -> None:
        """Register a callback fired with the new text whenever the document changes."""
        self._listeners.append(listener)

    def load(self, svg_text: str) -> bool:
        """Start over from ``svg_text``: normalized, fresh history, no selection."""
        error = _validate(svg_text)
        if error:
            self.validation_error = error
            logger.warning("load: rejected document (%s)", error)
            return False
        self.validation_error = None
        text = normalize_svg(svg_text, self.config.default_canvas_size)
        self.history.reset(text)
        self.selection = None
        self._set_document(text)
        return True

    def replace(self, svg_text: str) -> bool:
        """External code edit. Invalid text is flagged and the last good state kept."""
        error = _validate(svg_text)
        if error:
            self.validation_error = error
            logger.info("replace: keeping last good document (%s)", error)
            return False
        self.validation_error = None
        committed = self._commit(normalize_svg(svg_text, self.config.default_canvas_size))
        self._drop_stale_selection()
        return committed

    def _set_document(self, text: str) -> None:
        if text == self.document:
            return
        self.document = text
        for listener in self._listeners:
            listener(text)

    def _commit(self, text: str) -> bool:
        """Make ``text`` the document and record it. No-op when nothing changed."""
        if text == self.history.current:
            self._set_document(text)
            return False
        self.history.commit(text)
        self._set_document(text)
        return True

    def _preview(self, text: str) -> None:
        self._set_document(text)

    # ── Selection ──────────────────────────────────────────────────────────

    def select(self, node_id: str | None) -> str | None:
        """Select a paintable node.

        Missing ids, the root and the canvas background clear the selection.
        """
        root = try_parse(self.document)
        el = find_layer(root, node_id) if root is not None else None
        self.selection = node_id if el is not None and el.tag in PAINTABLE_TAGS else None
        return self.selection

    def _drop_stale_selection(self) -> None:
        if self.selection is None:
            return
        root = try_parse(self.document)
        if root is None or find_element(root, self.selection) is None:
            self.selection = None

    def _target(self, node_id: str | None) -> str | None:
        return node_id if node_id is not None else self.selection

    # ── Property edits ─────────────────────────────────────────────────────

    def apply(self, key: PropertyKey | str, value: PropertyValue, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        return self._commit(apply_property(self.document, target, key, value))

    def apply_batch(self, edits: list[PropertyEdit]) -> bool:
        """Apply several edits as a single history entry."""
        return self._commit(apply_edits(self.document, edits))

    # ── Creation ───────────────────────────────────────────────────────────

    def create_shape(self, kind: ShapeKind | str) -> str | None:
        text, new_id = primitives.create_shape(self.document, kind)
        if new_id is not None:
            self._commit(text)
            self.selection = new_id
        return new_id

    def add_image(self, href: str) -> str | None:
        text, new_id = primitives.add_image(self.document, href)
        if new_id is not None:
            self._commit(text)
            self.selection = new_id
        return new_id

    # ── Layers ─────────────────────────────────────────────────────────────

    def move_layer(self, direction: Literal["up", "down"], node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        return self._commit(layers.move_layer(self.document, target, direction))

    def duplicate(self, node_id: str | None = None) -> str | None:
        target = self._target(node_id)
        if target is None:
            return None
        text, new_id = layers.duplicate_layer(self.document, target, self.config.paste_offset)
        if new_id is not None:
            self._commit(text)
            self.selection = new_id
        return new_id

    def delete(self, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        committed = self._commit(layers.delete_layer(self.document, target))
        self._drop_stale_selection()
        return committed

    def toggle_visibility(self, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        return self._commit(layers.toggle_visibility(self.document, target))

    def align(self, edge: AlignEdge | str, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        return self._commit(layers.align_layer(self.document, target, edge))

    def nudge(self, dx: float, dy: float, node_id: str | None = None) -> bool:
        """Shift an x/y or cx/cy node; other kinds stay where they are."""
        target = self._target(node_id)
        root = try_parse(self.document)
        el = find_element(root, target) if root is not None else None
        if el is None or not layers.offset_node(el, dx, dy, translate_fallback=False):
            return False
        return self._commit(serialize_svg(root))

    # ── Fill and canvas ────────────────────────────────────────────────────

    def set_solid(self, color: str | None = None, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        return self._commit(gradients.set_solid(self.document, target, color))

    def set_gradient(
        self, kind: str, start: str, end: str, node_id: str | None = None
    ) -> str | None:
        target = self._target(node_id)
        if target is None:
            return None
        text, grad_id = gradients.set_gradient(self.document, target, kind, start, end)
        if grad_id is not None:
            self._commit(text)
        return grad_id

    def set_canvas_size(self, width: float, height: float) -> bool:
        return self._commit(canvas.set_canvas_size(self.document, width, height))

    def set_background(self, color: str) -> bool:
        return self._commit(canvas.set_background(self.document, color))

    # ── Clipboard ──────────────────────────────────────────────────────────

    def copy(self, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if target is None:
            return False
        return self.clipboard.copy(self.document, target)

    def cut(self, node_id: str | None = None) -> bool:
        target = self._target(node_id)
        if not self.copy(target):
            return False
        return self.delete(target)

    def paste(self) -> str | None:
        text, new_id = self.clipboard.paste(self.document, self.config.paste_offset)
        if new_id is not None:
            self._commit(text)
            self.selection = new_id
        return new_id

    # ── History ────────────────────────────────────────────────────────────

    def undo(self) -> bool:
        if not self.history.can_undo:
            return False
        self._set_document(self.history.undo())
        self._drop_stale_selection()
        return True

    def redo(self) -> bool:
        if not self.history.can_redo:
            return False
        self._set_document(self.history.redo())
        self._drop_stale_selection()
        return True

    # ── Pointer gestures ───────────────────────────────────────────────────

    @property
    def gesture_active(self) -> bool:
        return self.move_gesture.active or self.transform_gesture.active

    def pointer_down(self, target_id: str | None, pointer: Point, zoom: float = 1.0) -> bool:
        """Select the node under the pointer and start a move drag if it can move.

        ``target_id`` of None (the canvas root) or the background clears the
        selection. Returns whether a drag started.
        """
        if self.gesture_active:
            self.pointer_up()
        if self.select(target_id) is None:
            return False
        return self.move_gesture.begin(self.document, self.selection, pointer, zoom)

    def begin_transform(
        self,
        handle: Handle | str,
        pointer: Point,
        zoom: float = 1.0,
        canvas_origin: Point = (0.0, 0.0),
    ) -> bool:
        if self.selection is None:
            return False
        if self.gesture_active:
            self.pointer_up()
        return self.transform_gesture.begin(
            self.document, self.selection, handle, pointer, zoom, canvas_origin
        )

    def pointer_move(self, pointer: Point, modifier: bool = False) -> None:
        if self.transform_gesture.active:
            self._preview(self.transform_gesture.update(self.document, pointer, modifier))
        elif self.move_gesture.active:
            self._preview(self.move_gesture.update(self.document, pointer))

    def pointer_up(self) -> bool:
        """Finish any gesture, committing the previewed document once."""
        if not self.gesture_active:
            return False
        self.transform_gesture.end()
        self.move_gesture.end()
        return self._commit(self.document)

    # An interrupted drag keeps what the user last saw
    cancel_gesture = pointer_up

    # ── Derived views ──────────────────────────────────────────────────────

    def style_state(self, node_id: str | None = None) -> StyleState | None:
        return read_style_state(self.document, self._target(node_id))

    def describe(self) -> SceneDocument | None:
        return describe_document(self.document)


def _validate(svg_text: str) -> str | None:
    """The parse error message for ``svg_text``, or None when it is usable."""
    if not svg_text or not svg_text.strip():
        return "Document is empty"
    try:
        parse_document(svg_text)
    except ParseFailure as e:
        return str(e)
    return None
