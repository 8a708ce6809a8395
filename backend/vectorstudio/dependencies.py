"""FastAPI dependency injection."""

from __future__ import annotations

import logging
import uuid

from fastapi import HTTPException

from vectorstudio.config import settings
from vectorstudio.editor.config import EditorConfig
from vectorstudio.editor.session import EditorSession

logger = logging.getLogger(__name__)

# In-process registry, oldest first; one editing user per session id
_sessions: dict[str, EditorSession] = {}


def open_session(svg: str | None = None) -> tuple[str, EditorSession]:
    """Register a new session, evicting the oldest ones past ``max_sessions``."""
    while _sessions and len(_sessions) >= settings.max_sessions:
        evicted = next(iter(_sessions))
        del _sessions[evicted]
        logger.info("Evicted session %s", evicted)
    session_id = uuid.uuid4().hex
    session = EditorSession(svg, EditorConfig.from_settings(settings))
    _sessions[session_id] = session
    logger.info("Opened session %s (%d open)", session_id, len(_sessions))
    return session_id, session


def get_session(session_id: str) -> EditorSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


def close_session(session_id: str) -> bool:
    if _sessions.pop(session_id, None) is None:
        return False
    logger.info("Closed session %s (%d open)", session_id, len(_sessions))
    return True


def session_count() -> int:
    return len(_sessions)
