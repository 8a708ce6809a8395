"""API response models."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from vectorstudio.models.scene import SceneDocument, StyleState


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    sessions_open: int = 0


class SessionResponse(BaseModel):
    session_id: str
    svg: str
    selection: str | None = None
    can_undo: bool = False
    can_redo: bool = False
    validation_error: str | None = None
    scene: SceneDocument | None = None


class CreatedResponse(SessionResponse):
    """Session state plus the id of whatever the request created."""

    created_id: str | None = None


class StyleResponse(BaseModel):
    node_id: str | None = None
    style: StyleState | None = None


def export_filename() -> str:
    return f"vector-{int(time.time() * 1000)}.svg"


class ExportResponse(BaseModel):
    svg: str
    filename: str = Field(default_factory=export_filename)
