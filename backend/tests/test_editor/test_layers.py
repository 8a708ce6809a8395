"""Tests for layer ordering, duplication, visibility and alignment."""

from __future__ import annotations

import pytest

from vectorstudio.editor.layers import (
    UnsupportedAlignment,
    align_layer,
    delete_layer,
    duplicate_layer,
    list_layers,
    move_layer,
    toggle_visibility,
)
from vectorstudio.svg.parser import parse_document
from tests.conftest import ALIGN_SVG, BACKGROUND_SVG, EDITOR_SVG, GROUP_SVG, ROOT_ID_SVG, child_ids, node


# ---------------------------------------------------------------------------
# Listing and z-order
# ---------------------------------------------------------------------------

class TestOrder:
    def test_list_top_most_first(self):
        """Layers are listed in reverse paint order."""
        assert [layer.id for layer in list_layers(EDITOR_SVG)] == ["wave", "label", "dot", "box"]

    def test_background_not_listed(self):
        """The reserved background rect never shows up as a layer."""
        assert [layer.id for layer in list_layers(BACKGROUND_SVG)] == ["dot", "box"]

    def test_move_up(self):
        """Moving up swaps with the next sibling."""
        assert child_ids(move_layer(EDITOR_SVG, "box", "up")) == ["dot", "box", "label", "wave"]

    def test_move_down(self):
        """Moving down swaps with the previous sibling."""
        assert child_ids(move_layer(EDITOR_SVG, "dot", "down")) == ["dot", "box", "label", "wave"]

    def test_top_most_up_is_noop(self):
        assert move_layer(EDITOR_SVG, "wave", "up") == EDITOR_SVG

    def test_cannot_move_below_background(self):
        """The background stays the bottom-most node."""
        assert move_layer(BACKGROUND_SVG, "box", "down") == BACKGROUND_SVG

    def test_unknown_id(self):
        assert move_layer(EDITOR_SVG, "missing", "up") == EDITOR_SVG


# ---------------------------------------------------------------------------
# Duplicate, delete, visibility
# ---------------------------------------------------------------------------

class TestDuplicate:
    def test_duplicate_offset_and_position(self):
        """The clone lands right above the original, shifted by 10."""
        svg, new_id = duplicate_layer(EDITOR_SVG, "box")
        assert new_id and new_id != "box"
        assert child_ids(svg)[:2] == ["box", new_id]
        clone = node(svg, new_id)
        assert (clone.get("x"), clone.get("y")) == ("20", "20")
        assert clone.get("fill") == "#ff0000"

    def test_duplicate_circle_moves_center(self):
        """Circles are offset through cx/cy."""
        svg, new_id = duplicate_layer(EDITOR_SVG, "dot")
        assert (node(svg, new_id).get("cx"), node(svg, new_id).get("cy")) == ("60", "60")

    def test_duplicate_group_keeps_ids_unique(self):
        """Descendant ids are rewritten and groups get a translate."""
        svg, new_id = duplicate_layer(GROUP_SVG, "grp")
        ids = [el.get("id") for el in parse_document(svg).iter() if el.get("id")]
        assert len(ids) == len(set(ids)) == 6
        assert node(svg, new_id).get("transform") == "translate(10, 10)"

    def test_duplicate_missing(self):
        assert duplicate_layer(EDITOR_SVG, "missing") == (EDITOR_SVG, None)

    def test_delete(self):
        """Deleting removes the node and keeps the others in order."""
        assert child_ids(delete_layer(EDITOR_SVG, "dot")) == ["box", "label", "wave"]

    def test_delete_background_is_noop(self):
        """The background can only be changed through the canvas operations."""
        assert delete_layer(BACKGROUND_SVG, "editor-background") == BACKGROUND_SVG

    def test_toggle_visibility(self):
        """Toggling twice restores the original display state."""
        hidden = toggle_visibility(EDITOR_SVG, "box")
        assert node(hidden, "box").get("display") == "none"
        assert list_layers(hidden)[-1].visible is False
        shown = toggle_visibility(hidden, "box")
        assert node(shown, "box").get("display") is None


# ---------------------------------------------------------------------------
# Root element with an id
# ---------------------------------------------------------------------------

class TestRootId:
    @pytest.mark.parametrize("direction", ["up", "down"])
    def test_move_root(self, direction):
        """Moving the root returns the document unchanged."""
        assert move_layer(ROOT_ID_SVG, "svg8", direction) == ROOT_ID_SVG

    def test_duplicate_root(self):
        assert duplicate_layer(ROOT_ID_SVG, "svg8") == (ROOT_ID_SVG, None)

    def test_delete_root(self):
        """Deleting the root returns the document unchanged."""
        assert delete_layer(ROOT_ID_SVG, "svg8") == ROOT_ID_SVG

    def test_toggle_root(self):
        assert toggle_visibility(ROOT_ID_SVG, "svg8") == ROOT_ID_SVG

    def test_align_root(self):
        """Aligning the root is a no-op, not an unsupported-alignment error."""
        assert align_layer(ROOT_ID_SVG, "svg8", "left") == ROOT_ID_SVG

    def test_children_still_editable(self):
        """Layers under an id-carrying root behave normally."""
        assert child_ids(delete_layer(ROOT_ID_SVG, "rect10")) == ["defs2", "path12"]


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------

class TestAlign:
    @pytest.mark.parametrize("edge,expected_x", [("left", "0"), ("center", "40"), ("right", "80")])
    def test_rect_horizontal(self, edge, expected_x):
        """Horizontal edges move x only."""
        el = node(align_layer(ALIGN_SVG, "bar", edge), "bar")
        assert el.get("x") == expected_x
        assert el.get("y") == "30"

    @pytest.mark.parametrize("edge,expected_y", [("top", "0"), ("middle", "45"), ("bottom", "90")])
    def test_rect_vertical(self, edge, expected_y):
        """Vertical edges move y only."""
        el = node(align_layer(ALIGN_SVG, "bar", edge), "bar")
        assert el.get("y") == expected_y
        assert el.get("x") == "50"

    def test_circle_uses_center(self):
        """Circles align by their bounding box but write cx/cy."""
        el = node(align_layer(ALIGN_SVG, "ball", "right"), "ball")
        assert el.get("cx") == "95"
        el = node(align_layer(ALIGN_SVG, "ball", "middle"), "ball")
        assert el.get("cy") == "50"

    def test_text_center(self):
        """Centered text is anchored in the middle of the canvas."""
        el = node(align_layer(ALIGN_SVG, "caption", "center"), "caption")
        assert el.get("x") == "50"
        assert el.get("text-anchor") == "middle"

    def test_text_other_edges_unsupported(self):
        with pytest.raises(UnsupportedAlignment):
            align_layer(ALIGN_SVG, "caption", "left")

    def test_polygon_unsupported(self):
        """Polygons have no attribute box to align."""
        with pytest.raises(UnsupportedAlignment):
            align_layer(ALIGN_SVG, "tri", "center")

    def test_unknown_id(self):
        assert align_layer(ALIGN_SVG, "missing", "left") == ALIGN_SVG
