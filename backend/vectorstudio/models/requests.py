"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from vectorstudio.models.edit_ops import AlignEdge, PropertyEdit, ShapeKind


class CreateSessionRequest(BaseModel):
    svg: str | None = Field(default=None, description="Initial SVG code; blank canvas when omitted")


class DocumentRequest(BaseModel):
    svg: str = Field(..., description="Replacement SVG code")


class EditRequest(BaseModel):
    edits: list[PropertyEdit] = Field(..., min_length=1, description="Property edits, applied in order")


class ShapeRequest(BaseModel):
    kind: ShapeKind


class ImageRequest(BaseModel):
    href: str = Field(..., description="Image URL or data URI")


class AlignRequest(BaseModel):
    node_id: str | None = Field(default=None, description="Defaults to the current selection")
    edge: AlignEdge


class FillRequest(BaseModel):
    node_id: str | None = None
    fill_type: Literal["solid", "linear", "radial"] = "solid"
    color: str | None = Field(default=None, description="Solid colour; omitted clears the inline fill")
    start: str = "#000000"
    end: str = "#ffffff"


class CanvasRequest(BaseModel):
    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    background: str | None = Field(default=None, description="Colour, or 'none' to remove")


class ClipboardRequest(BaseModel):
    node_id: str | None = None


class NudgeRequest(BaseModel):
    node_id: str | None = None
    dx: float = 0.0
    dy: float = 0.0
