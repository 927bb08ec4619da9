"""Sync session lifecycle.

One :class:`SyncSession` exists per dashboard.  It owns the handle of the
periodic poll loop and the stop token every asynchronous step checks
before touching shared state.
"""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum

from pyesprelay.exceptions import RelaySessionStoppedError

_logger = logging.getLogger(__name__)


class SessionPhase(StrEnum):
    ACTIVE = "active"
    STOPPED = "stopped"
    RESET = "reset"


class SyncSession:
    """Process-wide sync state with a one-way ``ACTIVE -> STOPPED/RESET`` transition.

    ``STOPPED`` is reached by teardown, ``RESET`` by a completed factory
    reset.  Both are final; a stopped session is never restarted.
    """

    def __init__(self) -> None:
        self._phase = SessionPhase.ACTIVE
        self._stop_token = asyncio.Event()
        self._timer: asyncio.Task[None] | None = None

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase is SessionPhase.ACTIVE

    @property
    def running(self) -> bool:
        """Whether the poll loop is scheduled."""
        return self.is_active and self._timer is not None and not self._timer.done()

    @property
    def timer(self) -> asyncio.Task[None] | None:
        return self._timer

    @property
    def stop_token(self) -> asyncio.Event:
        return self._stop_token

    def attach_timer(self, timer: asyncio.Task[None]) -> None:
        """Register the poll loop task.

        Raises
        ------
        RelaySessionStoppedError
            If the session already left ``ACTIVE``.
        RuntimeError
            If a loop is already attached.
        """
        if not self.is_active:
            timer.cancel()
            raise RelaySessionStoppedError(f"session is {self._phase}; create a new one")
        if self._timer is not None and not self._timer.done():
            timer.cancel()
            raise RuntimeError("poll loop already running")
        self._timer = timer

    def stop(self, phase: SessionPhase = SessionPhase.STOPPED) -> bool:
        """Leave ``ACTIVE`` and cancel the poll loop.

        Returns ``True`` if this call performed the transition, ``False``
        if the session had already stopped.
        """
        if phase is SessionPhase.ACTIVE:
            raise ValueError("stop() needs a final phase")
        if not self.is_active:
            return False
        self._phase = phase
        self._stop_token.set()
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        _logger.info("Sync session %s", phase)
        return True
