"""In-memory registry of exam sessions hosted by the API server."""

from __future__ import annotations

import logging
from threading import Lock
from uuid import uuid4

from exam_app.constants.exam_constants import (
    COMPLETED_SESSION_RETENTION_TICKS,
    SESSION_IDLE_TIMEOUT_TICKS,
)
from exam_app.core.services.exam_session import ExamSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Keeps live sessions for the lifetime of the process. Nothing is persisted.

    Every ``tick_all()`` counts one idle tick per session; ``get()`` resets the
    count. Sessions idle for ``idle_timeout_ticks`` are dropped, completed ones
    already after ``completed_retention_ticks``.
    """

    def __init__(
        self,
        idle_timeout_ticks: int = SESSION_IDLE_TIMEOUT_TICKS,
        completed_retention_ticks: int = COMPLETED_SESSION_RETENTION_TICKS,
    ) -> None:
        if idle_timeout_ticks <= 0 or completed_retention_ticks <= 0:
            raise ValueError("Session retention limits must be positive.")
        self._lock = Lock()
        self._sessions: dict[str, ExamSession] = {}
        self._idle_ticks: dict[str, int] = {}
        self._idle_timeout_ticks = idle_timeout_ticks
        self._completed_retention_ticks = completed_retention_ticks

    def add(self, session: ExamSession) -> str:
        session_id = uuid4().hex
        with self._lock:
            self._sessions[session_id] = session
            self._idle_ticks[session_id] = 0
        logger.info(
            "Started session %s for %s with %d question(s)",
            session_id,
            session.user_name,
            session.question_count,
        )
        return session_id

    def get(self, session_id: str) -> ExamSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._idle_ticks[session_id] = 0
            return session

    def discard(self, session_id: str) -> bool:
        """Drop a session. Returns False when it was not known."""
        with self._lock:
            removed = self._sessions.pop(session_id, None)
            self._idle_ticks.pop(session_id, None)
        if removed is not None:
            logger.info("Discarded session %s", session_id)
        return removed is not None

    def tick_all(self) -> None:
        """Deliver one timer tick to every live session, then drop stale ones."""
        with self._lock:
            sessions = list(self._sessions.values())
        for session in sessions:
            session.on_tick()
        self._sweep()

    def _sweep(self) -> None:
        expired: list[str] = []
        with self._lock:
            for session_id, session in self._sessions.items():
                idle = self._idle_ticks.get(session_id, 0) + 1
                self._idle_ticks[session_id] = idle
                limit = (
                    self._completed_retention_ticks
                    if session.is_completed
                    else self._idle_timeout_ticks
                )
                if idle >= limit:
                    expired.append(session_id)
            for session_id in expired:
                del self._sessions[session_id]
                del self._idle_ticks[session_id]
        for session_id in expired:
            logger.info("Expired idle session %s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
