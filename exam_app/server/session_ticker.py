"""Background one-second tick source for server-hosted sessions."""

from __future__ import annotations

import logging
from threading import Event, Thread

from exam_app.constants.exam_constants import TICK_INTERVAL_SECONDS
from exam_app.core.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionTicker:
    """Calls ``store.tick_all()`` on a fixed period from a daemon thread."""

    def __init__(self, store: SessionStore, interval_seconds: float = TICK_INTERVAL_SECONDS) -> None:
        if interval_seconds <= 0:
            raise ValueError("Tick interval must be positive.")
        self._store = store
        self._interval = interval_seconds
        self._stop = Event()
        self._thread: Thread | None = None

    def start(self) -> Thread:
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = Thread(target=self._run, name="SessionTicker", daemon=True)
        self._thread.start()
        logger.debug("Session ticker started (every %.1fs)", self._interval)
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self._store.tick_all()
