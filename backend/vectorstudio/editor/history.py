"""Undo/redo over whole-document snapshots."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class HistoryLog:
    """Ordered snapshots plus a current index.

    The index always points at an existing snapshot. Committing truncates
    everything after the index before appending, so redo after a fresh
    commit is a no-op.
    """

    def __init__(self, initial: str = "") -> None:
        self._snapshots: list[str] = [initial]
        self._index = 0

    def reset(self, initial: str) -> None:
        self._snapshots = [initial]
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> str:
        return self._snapshots[self._index]

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def commit(self, snapshot: str) -> None:
        del self._snapshots[self._index + 1:]
        self._snapshots.append(snapshot)
        self._index = len(self._snapshots) - 1
        logger.debug("History commit -> %d/%d", self._index + 1, len(self._snapshots))

    def undo(self) -> str:
        if self.can_undo:
            self._index -= 1
        return self.current

    def redo(self) -> str:
        if self.can_redo:
            self._index += 1
        return self.current
