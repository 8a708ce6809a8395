"""Tests for API endpoints."""

from __future__ import annotations

import re

import pytest
from fastapi.testclient import TestClient

from vectorstudio.config import settings
from vectorstudio.main import app
from tests.conftest import ALIGN_SVG, EDITOR_SVG, ROOT_ID_SVG, node


client = TestClient(app)


@pytest.fixture
def sid() -> str:
    response = client.post("/api/sessions", json={"svg": EDITOR_SVG})
    assert response.status_code == 200
    return response.json()["session_id"]


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"


# ---------------------------------------------------------------------------
# Sessions and documents
# ---------------------------------------------------------------------------

def test_create_blank_session():
    response = client.post("/api/sessions", json={})
    assert response.status_code == 200
    data = response.json()
    assert data["scene"]["viewbox"]["width"] == 512
    assert data["can_undo"] is False


def test_read_session(sid):
    data = client.get(f"/api/sessions/{sid}").json()
    assert data["session_id"] == sid
    assert [layer["id"] for layer in data["scene"]["layers"]] == ["wave", "label", "dot", "box"]


def test_unknown_session():
    """Unknown session ids are 404 on every route."""
    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/undo").status_code == 404


def test_create_invalid_session():
    """A malformed initial document opens a blank canvas and reports the parse error."""
    response = client.post("/api/sessions", json={"svg": "<svg><g></svg>"})
    assert response.status_code == 200
    data = response.json()
    assert data["validation_error"]
    assert data["scene"]["layers"] == []


def test_delete_session(sid):
    assert client.delete(f"/api/sessions/{sid}").status_code == 204
    assert client.get(f"/api/sessions/{sid}").status_code == 404
    assert client.delete(f"/api/sessions/{sid}").status_code == 404


def test_oldest_sessions_evicted(monkeypatch):
    """Opening past max_sessions drops the oldest session."""
    monkeypatch.setattr(settings, "max_sessions", 2)
    first = client.post("/api/sessions", json={}).json()["session_id"]
    client.post("/api/sessions", json={})
    client.post("/api/sessions", json={})
    assert client.get(f"/api/sessions/{first}").status_code == 404
    assert client.get("/api/health").json()["sessions_open"] == 2


def test_replace_invalid_document(sid):
    """An invalid document is reported without losing the last good one."""
    response = client.put(f"/api/sessions/{sid}/document", json={"svg": "<svg><g></svg>"})
    assert response.status_code == 200
    data = response.json()
    assert data["validation_error"]
    assert node(data["svg"], "box") is not None


def test_export(sid):
    """Export hands back the text verbatim under a timestamped name."""
    data = client.get(f"/api/sessions/{sid}/export").json()
    assert data["svg"].startswith("<svg")
    assert re.fullmatch(r"vector-\d+\.svg", data["filename"])


# ---------------------------------------------------------------------------
# Edits and history
# ---------------------------------------------------------------------------

def test_edits_then_undo_redo(sid):
    response = client.post(f"/api/sessions/{sid}/edits", json={
        "edits": [{"target": "box", "key": "fill", "value": "#0000ff"}],
    })
    assert response.status_code == 200
    assert node(response.json()["svg"], "box").get("fill") == "#0000ff"
    assert response.json()["can_undo"] is True

    undone = client.post(f"/api/sessions/{sid}/undo").json()
    assert node(undone["svg"], "box").get("fill") == "#ff0000"
    assert undone["can_redo"] is True

    redone = client.post(f"/api/sessions/{sid}/redo").json()
    assert node(redone["svg"], "box").get("fill") == "#0000ff"


def test_unknown_property_key(sid):
    """Unknown property keys map to 422."""
    response = client.post(f"/api/sessions/{sid}/edits", json={
        "edits": [{"target": "box", "key": "sparkle", "value": 1}],
    })
    assert response.status_code == 422


def test_create_shape(sid):
    data = client.post(f"/api/sessions/{sid}/shapes", json={"kind": "star"}).json()
    assert data["created_id"].startswith("shape-")
    assert data["selection"] == data["created_id"]
    assert node(data["svg"], data["created_id"]).tag == "polygon"


def test_add_image(sid):
    data = client.post(f"/api/sessions/{sid}/images", json={"href": "data:image/png;base64,AAAA"}).json()
    assert node(data["svg"], data["created_id"]).tag == "image"


# ---------------------------------------------------------------------------
# Layers, alignment, fill, canvas
# ---------------------------------------------------------------------------

def test_layer_duplicate(sid):
    data = client.post(f"/api/sessions/{sid}/layers/box/duplicate").json()
    clone = node(data["svg"], data["created_id"])
    assert (clone.get("x"), clone.get("y")) == ("20", "20")


def test_layer_bad_action(sid):
    """Actions outside the known set are rejected by validation."""
    assert client.post(f"/api/sessions/{sid}/layers/box/explode").status_code == 422


def test_layer_select_and_toggle(sid):
    data = client.post(f"/api/sessions/{sid}/layers/dot/select").json()
    assert data["selection"] == "dot"
    data = client.post(f"/api/sessions/{sid}/layers/dot/toggle").json()
    assert node(data["svg"], "dot").get("display") == "none"


def test_align():
    sid = client.post("/api/sessions", json={"svg": ALIGN_SVG}).json()["session_id"]
    data = client.post(f"/api/sessions/{sid}/align", json={"node_id": "bar", "edge": "center"}).json()
    assert node(data["svg"], "bar").get("x") == "40"


def test_align_unsupported(sid):
    response = client.post(f"/api/sessions/{sid}/align", json={"node_id": "label", "edge": "left"})
    assert response.status_code == 422


def test_gradient_fill(sid):
    data = client.post(f"/api/sessions/{sid}/fill", json={
        "node_id": "box", "fill_type": "linear", "start": "#ff0000", "end": "#0000ff",
    }).json()
    assert data["created_id"].startswith("grad-")
    gradients = data["scene"]["gradients"]
    assert gradients[0]["stops"] == [
        {"offset": "0%", "color": "#ff0000"},
        {"offset": "100%", "color": "#0000ff"},
    ]


def test_solid_fill(sid):
    data = client.post(f"/api/sessions/{sid}/fill", json={"node_id": "box", "color": "#123456"}).json()
    assert node(data["svg"], "box").get("fill") == "#123456"


def test_canvas(sid):
    data = client.post(f"/api/sessions/{sid}/canvas", json={
        "width": 300, "height": 200, "background": "#eeeeee",
    }).json()
    assert data["scene"]["width"] == 300
    assert data["scene"]["background"] == "#eeeeee"


def test_canvas_needs_both_dimensions(sid):
    """Width without height is rejected."""
    assert client.post(f"/api/sessions/{sid}/canvas", json={"width": 300}).status_code == 422


# ---------------------------------------------------------------------------
# Clipboard, nudge, style
# ---------------------------------------------------------------------------

def test_copy_paste(sid):
    client.post(f"/api/sessions/{sid}/clipboard/copy", json={"node_id": "dot"})
    data = client.post(f"/api/sessions/{sid}/clipboard/paste").json()
    assert node(data["svg"], data["created_id"]).get("cx") == "60"


def test_cut(sid):
    data = client.post(f"/api/sessions/{sid}/clipboard/cut", json={"node_id": "box"}).json()
    assert node(data["svg"], "box") is None


def test_nudge(sid):
    data = client.post(f"/api/sessions/{sid}/nudge", json={"node_id": "box", "dx": 1, "dy": 0}).json()
    assert node(data["svg"], "box").get("x") == "11"


def test_style(sid):
    data = client.get(f"/api/sessions/{sid}/style", params={"node_id": "dot"}).json()
    assert data["node_id"] == "dot"
    assert data["style"]["fill"] == "#00ff00"
    assert data["style"]["transform"]["rotate"] == 0


def test_style_without_selection(sid):
    """With nothing selected there is no style to report."""
    data = client.get(f"/api/sessions/{sid}/style").json()
    assert data["style"] is None


# ---------------------------------------------------------------------------
# Documents with an id on the root
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("action", ["select", "up", "down", "duplicate", "delete", "toggle"])
def test_root_id_layer_actions(action):
    """Layer actions on the root id leave the document alone instead of failing."""
    created = client.post("/api/sessions", json={"svg": ROOT_ID_SVG}).json()
    response = client.post(f"/api/sessions/{created['session_id']}/layers/svg8/{action}")
    assert response.status_code == 200
    data = response.json()
    assert data["svg"] == created["svg"]
    assert data["selection"] is None
    assert data["created_id"] is None


def test_root_id_cut():
    sid = client.post("/api/sessions", json={"svg": ROOT_ID_SVG}).json()["session_id"]
    response = client.post(f"/api/sessions/{sid}/clipboard/cut", json={"node_id": "svg8"})
    assert response.status_code == 200
    assert node(response.json()["svg"], "rect10") is not None
