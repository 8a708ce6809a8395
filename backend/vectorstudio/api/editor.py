"""Editing session endpoints.

Handlers are coroutines with no awaits inside, so requests against a
session run one at a time on the event loop.
"""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException

from vectorstudio.dependencies import close_session, get_session, open_session
from vectorstudio.editor.session import EditorSession
from vectorstudio.models.requests import (
    AlignRequest,
    CanvasRequest,
    ClipboardRequest,
    CreateSessionRequest,
    DocumentRequest,
    EditRequest,
    FillRequest,
    ImageRequest,
    NudgeRequest,
    ShapeRequest,
)
from vectorstudio.models.responses import CreatedResponse, ExportResponse, SessionResponse, StyleResponse

router = APIRouter(prefix="/sessions", tags=["editor"])
logger = logging.getLogger(__name__)


def _state(session_id: str, session: EditorSession, created_id: str | None = None) -> CreatedResponse:
    return CreatedResponse(
        session_id=session_id,
        svg=session.document,
        selection=session.selection,
        can_undo=session.history.can_undo,
        can_redo=session.history.can_redo,
        validation_error=session.validation_error,
        scene=session.describe(),
        created_id=created_id,
    )


def _unprocessable(e: ValueError) -> HTTPException:
    logger.info("Rejected edit: %s", e)
    return HTTPException(status_code=422, detail=str(e))


@router.post("", response_model=SessionResponse)
async def create_session(req: CreateSessionRequest) -> SessionResponse:
    session_id, session = open_session(req.svg)
    return _state(session_id, session)


@router.get("/{session_id}", response_model=SessionResponse)
async def read_session(session_id: str, session: EditorSession = Depends(get_session)) -> SessionResponse:
    return _state(session_id, session)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str) -> None:
    if not close_session(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


@router.put("/{session_id}/document", response_model=SessionResponse)
async def replace_document(
    session_id: str, req: DocumentRequest, session: EditorSession = Depends(get_session)
) -> SessionResponse:
    session.replace(req.svg)
    return _state(session_id, session)


@router.post("/{session_id}/edits", response_model=SessionResponse)
async def apply_edits(
    session_id: str, req: EditRequest, session: EditorSession = Depends(get_session)
) -> SessionResponse:
    try:
        session.apply_batch(req.edits)
    except ValueError as e:
        raise _unprocessable(e) from e
    return _state(session_id, session)


@router.post("/{session_id}/undo", response_model=SessionResponse)
async def undo(session_id: str, session: EditorSession = Depends(get_session)) -> SessionResponse:
    session.undo()
    return _state(session_id, session)


@router.post("/{session_id}/redo", response_model=SessionResponse)
async def redo(session_id: str, session: EditorSession = Depends(get_session)) -> SessionResponse:
    session.redo()
    return _state(session_id, session)


@router.post("/{session_id}/shapes", response_model=CreatedResponse)
async def create_shape(
    session_id: str, req: ShapeRequest, session: EditorSession = Depends(get_session)
) -> CreatedResponse:
    return _state(session_id, session, session.create_shape(req.kind))


@router.post("/{session_id}/images", response_model=CreatedResponse)
async def add_image(
    session_id: str, req: ImageRequest, session: EditorSession = Depends(get_session)
) -> CreatedResponse:
    return _state(session_id, session, session.add_image(req.href))


@router.post("/{session_id}/layers/{node_id}/{action}", response_model=CreatedResponse)
async def layer_action(
    session_id: str,
    node_id: str,
    action: Literal["select", "up", "down", "duplicate", "delete", "toggle"],
    session: EditorSession = Depends(get_session),
) -> CreatedResponse:
    created_id = None
    if action == "select":
        session.select(node_id)
    elif action in ("up", "down"):
        session.move_layer(action, node_id)
    elif action == "duplicate":
        created_id = session.duplicate(node_id)
    elif action == "delete":
        session.delete(node_id)
    else:
        session.toggle_visibility(node_id)
    return _state(session_id, session, created_id)


@router.post("/{session_id}/align", response_model=SessionResponse)
async def align(session_id: str, req: AlignRequest, session: EditorSession = Depends(get_session)) -> SessionResponse:
    try:
        session.align(req.edge, req.node_id)
    except ValueError as e:
        raise _unprocessable(e) from e
    return _state(session_id, session)


@router.post("/{session_id}/fill", response_model=CreatedResponse)
async def fill(session_id: str, req: FillRequest, session: EditorSession = Depends(get_session)) -> CreatedResponse:
    if req.fill_type == "solid":
        session.set_solid(req.color, req.node_id)
        return _state(session_id, session)
    try:
        grad_id = session.set_gradient(req.fill_type, req.start, req.end, req.node_id)
    except ValueError as e:
        raise _unprocessable(e) from e
    return _state(session_id, session, grad_id)


@router.post("/{session_id}/canvas", response_model=SessionResponse)
async def canvas(session_id: str, req: CanvasRequest, session: EditorSession = Depends(get_session)) -> SessionResponse:
    if (req.width is None) != (req.height is None):
        raise HTTPException(status_code=422, detail="width and height must be given together")
    if req.width is not None:
        session.set_canvas_size(req.width, req.height)
    if req.background is not None:
        session.set_background(req.background)
    return _state(session_id, session)


@router.post("/{session_id}/clipboard/{action}", response_model=CreatedResponse)
async def clipboard(
    session_id: str,
    action: Literal["copy", "cut", "paste"],
    req: ClipboardRequest | None = None,
    session: EditorSession = Depends(get_session),
) -> CreatedResponse:
    node_id = req.node_id if req is not None else None
    if action == "copy":
        session.copy(node_id)
        return _state(session_id, session)
    if action == "cut":
        session.cut(node_id)
        return _state(session_id, session)
    return _state(session_id, session, session.paste())


@router.post("/{session_id}/nudge", response_model=SessionResponse)
async def nudge(session_id: str, req: NudgeRequest, session: EditorSession = Depends(get_session)) -> SessionResponse:
    session.nudge(req.dx, req.dy, req.node_id)
    return _state(session_id, session)


@router.get("/{session_id}/style", response_model=StyleResponse)
async def style(
    session_id: str, node_id: str | None = None, session: EditorSession = Depends(get_session)
) -> StyleResponse:
    state = session.style_state(node_id)
    return StyleResponse(node_id=state.node_id if state else None, style=state)


@router.get("/{session_id}/export", response_model=ExportResponse)
async def export(session_id: str, session: EditorSession = Depends(get_session)) -> ExportResponse:
    return ExportResponse(svg=session.document)
