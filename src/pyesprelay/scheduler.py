"""Periodic polling of relay and connectivity state."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from pyesprelay.exceptions import RelayError, RelaySessionStoppedError
from pyesprelay.models.messaging import MessagingInfo
from pyesprelay.models.network import NetworkInfo
from pyesprelay.models.relay import RelayCollection
from pyesprelay.session import SessionPhase, SyncSession
from pyesprelay.state.store import ConnectivityState, RelayStateStore

_logger = logging.getLogger(__name__)


class PollSource(Protocol):
    """Read side of :class:`pyesprelay.client.RelayDeviceClient`."""

    async def fetch_relays(self) -> RelayCollection:
        ...

    async def fetch_network_info(self) -> NetworkInfo:
        ...

    async def fetch_messaging_info(self) -> MessagingInfo:
        ...


class SyncScheduler:
    """Drives one poll tick every ``interval`` seconds while the session is active.

    Each tick runs as its own task, so a hung request only delays its own
    tick.  Poll failures are logged and dropped; the previous good state
    stays in the stores.  Results that arrive after the session stopped
    are discarded.
    """

    def __init__(
        self,
        source: PollSource,
        store: RelayStateStore,
        connectivity: ConnectivityState,
        session: SyncSession,
        *,
        interval: float,
        poll_network_each_tick: bool = False,
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self._source = source
        self._store = store
        self._connectivity = connectivity
        self._session = session
        self._interval = interval
        self._poll_network_each_tick = poll_network_each_tick
        self._on_update = on_update
        self._inflight: set[asyncio.Task[None]] = set()
        self._ticks = 0

    @property
    def session(self) -> SyncSession:
        return self._session

    @property
    def ticks(self) -> int:
        """Number of ticks launched so far."""
        return self._ticks

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Schedule the poll loop.  The first tick fires immediately."""
        if not self._session.is_active:
            raise RelaySessionStoppedError(f"session is {self._session.phase}; create a new one")
        self._session.attach_timer(asyncio.create_task(self._run(), name="pyesprelay-poll-loop"))
        _logger.info("Polling every %.2fs", self._interval)

    def stop(self, phase: SessionPhase = SessionPhase.STOPPED) -> bool:
        """Stop polling for good.  In-flight requests may still resolve but are discarded."""
        return self._session.stop(phase)

    async def shutdown(self) -> None:
        """Teardown: stop the session and wait for the poll loop to exit.

        In-flight ticks are not awaited; a request stuck on an unresponsive
        board would otherwise hold teardown until the HTTP timeout.  They
        resolve on their own and their results are discarded.
        """
        self.stop()
        timer = self._session.timer
        if timer is not None:
            await asyncio.wait([timer])
        if self._inflight:
            _logger.debug("Leaving %d in-flight poll(s) to resolve after shutdown", len(self._inflight))

    async def wait_idle(self) -> None:
        """Wait until every launched tick and one-off poll has finished."""
        timer = self._session.timer
        if timer is not None and not self._session.is_active:
            await asyncio.wait([timer])
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _run(self) -> None:
        stop_token = self._session.stop_token
        while self._session.is_active:
            self._spawn(self.tick(include_network=self._ticks == 0 or self._poll_network_each_tick))
            self._ticks += 1
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(stop_token.wait(), timeout=self._interval)

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task[None]:
        task: asyncio.Task[None] = asyncio.ensure_future(coro)
        self._inflight.add(task)
        task.add_done_callback(self._tick_done)
        return task

    def _tick_done(self, task: asyncio.Task[None]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Poll tick crashed", exc_info=exc)

    # ------------------------------------------------------------------
    # Polls
    # ------------------------------------------------------------------

    async def tick(self, *, include_network: bool = False) -> None:
        """Run one poll cycle: relays and MQTT status, optionally network info."""
        polls: list[Awaitable[None]] = [self._poll_relays(), self._poll_messaging()]
        if include_network:
            polls.append(self._poll_network())
        await asyncio.gather(*polls)

    async def refresh_relays(self) -> bool:
        """One-off relay poll outside the periodic cadence.

        Returns ``True`` when a fresh collection was applied.
        """
        return await self._poll_relays()

    def schedule_refresh(self, delay: float) -> asyncio.Task[None]:
        """Run :meth:`refresh_relays` after *delay* seconds as a tracked task."""

        async def _later() -> None:
            await asyncio.sleep(delay)
            await self._poll_relays()

        return self._spawn(_later())

    async def _poll_relays(self) -> bool:
        if not self._session.is_active:
            return False
        try:
            relays = await self._source.fetch_relays()
        except RelayError as exc:
            _logger.warning("Relay poll failed: %s", exc)
            return False
        if not self._session.is_active:
            _logger.debug("Discarding relay poll that resolved after stop")
            return False
        self._store.replace_all(relays)
        self._notify()
        return True

    async def _poll_messaging(self) -> None:
        if not self._session.is_active:
            return
        try:
            info = await self._source.fetch_messaging_info()
        except RelayError as exc:
            _logger.warning("MQTT status poll failed: %s", exc)
            return
        if not self._session.is_active:
            return
        self._connectivity.update_messaging(info)
        self._notify()

    async def _poll_network(self) -> None:
        if not self._session.is_active:
            return
        try:
            info = await self._source.fetch_network_info()
        except RelayError as exc:
            _logger.warning("WiFi info poll failed: %s", exc)
            return
        if not self._session.is_active:
            return
        self._connectivity.update_network(info)
        self._notify()

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()
