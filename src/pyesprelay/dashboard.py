"""Composition root tying client, stores, scheduler and reset flow together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from pyesprelay.config import RelayClientConfig
from pyesprelay.exceptions import RelayError, RelaySessionStoppedError
from pyesprelay.models.command_responses import CommandAck
from pyesprelay.presenter import DashboardView, TerminalView, present
from pyesprelay.reset import Alert, Confirm, ResetFlow, ResetOutcome, ResetTarget
from pyesprelay.scheduler import PollSource, SyncScheduler
from pyesprelay.session import SyncSession
from pyesprelay.state.commands import RelayCommand, RequestReset, ToggleRelay
from pyesprelay.state.store import ConnectivityState, RelayStateStore

_logger = logging.getLogger(__name__)

View = DashboardView | TerminalView


class DeviceApi(PollSource, ResetTarget, Protocol):
    async def set_relay(self, relay_id: int, state: bool) -> CommandAck:
        ...


def _decline(_prompt: str) -> bool:
    return False


def _log_alert(message: str) -> None:
    _logger.warning("%s", message)


@dataclass(slots=True)
class _PendingToggles:
    """Unacknowledged toggles for one relay."""

    settled: bool
    generation: int
    in_flight: int = 0


class RelayDashboard:
    """Live view of one relay board.

    Usage::

        async with RelayDeviceClient(config) as client:
            async with RelayDashboard(client, config, on_render=print) as dashboard:
                await dashboard.dispatch(ToggleRelay(relay_id=1, state=True))

    Parameters
    ----------
    client : DeviceApi
        Normally a :class:`pyesprelay.client.RelayDeviceClient`.
    config : RelayClientConfig
        Poll cadence, confirmation delay and setup network name.
    confirm : callable, optional
        Reset confirmation prompt.  Without one every reset is declined.
    alert : callable, optional
        Receives reset success/failure messages.  Defaults to logging.
    on_error : callable, optional
        Receives the error of a failed relay command.
    on_render : callable, optional
        Called with the new view after every visible state change.
    """

    def __init__(
        self,
        client: DeviceApi,
        config: RelayClientConfig,
        *,
        confirm: Confirm | None = None,
        alert: Alert | None = None,
        on_error: Callable[[RelayError], None] | None = None,
        on_render: Callable[[View], None] | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._on_error = on_error
        self._on_render = on_render
        self._pending: dict[int, _PendingToggles] = {}
        self.store = RelayStateStore()
        self.connectivity = ConnectivityState()
        self.session = SyncSession()
        self.scheduler = SyncScheduler(
            client,
            self.store,
            self.connectivity,
            self.session,
            interval=config.poll_interval,
            poll_network_each_tick=config.poll_network_each_tick,
            on_update=self._render,
        )
        self._reset_flow = ResetFlow(
            client,
            self.scheduler,
            confirm=confirm or _decline,
            alert=alert or _log_alert,
            setup_network_name=config.setup_network_name,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RelayDashboard:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def start(self) -> None:
        self.scheduler.start()
        self._render()

    async def stop(self) -> None:
        """Teardown.  A no-op for the phase if a reset already stopped the session."""
        await self.scheduler.shutdown()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def view(self) -> View:
        return present(
            self.store.current(),
            self.connectivity.network,
            self.connectivity.messaging,
            self.session.phase,
            setup_network_name=self._config.setup_network_name,
        )

    def _render(self) -> None:
        if self._on_render is not None:
            self._on_render(self.view())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def dispatch(self, command: RelayCommand) -> bool | ResetOutcome:
        """Handle one user command.

        Returns the toggle's success flag or the reset outcome.

        Raises
        ------
        RelaySessionStoppedError
            If the session already stopped.
        """
        if isinstance(command, ToggleRelay):
            return await self._toggle(command)
        if isinstance(command, RequestReset):
            outcome = await self._reset_flow.run()
            if outcome is ResetOutcome.COMPLETED:
                self._render()
            return outcome
        raise TypeError(f"unsupported command: {command!r}")

    async def _toggle(self, command: ToggleRelay) -> bool:
        if not self.session.is_active:
            raise RelaySessionStoppedError(f"session is {self.session.phase}; relay commands are disabled")

        relay_id = command.relay_id
        previous = self.store.apply_optimistic(relay_id, command.state)
        if previous is not None:
            pending = self._pending.get(relay_id)
            if pending is None:
                pending = _PendingToggles(settled=previous, generation=self.store.generation)
                self._pending[relay_id] = pending
            pending.in_flight += 1
            self._render()

        acknowledged = False
        try:
            await self._client.set_relay(relay_id, command.state)
            acknowledged = True
        except RelayError as exc:
            _logger.error("Failed to set relay %s to %s: %s", relay_id, command.state, exc)
            if self._on_error is not None:
                self._on_error(exc)
            return False
        finally:
            self._settle(relay_id, command.state if acknowledged else None)

        if self.session.is_active:
            self.scheduler.schedule_refresh(self._config.confirm_delay)
        return True

    def _settle(self, relay_id: int, applied: bool | None) -> None:
        """Account for one finished toggle; *applied* is ``None`` when it failed.

        The cache is only rolled back once the last pending toggle for the
        relay has finished, and only if no poll replaced it meanwhile.
        """
        pending = self._pending.get(relay_id)
        if pending is None:
            return
        pending.in_flight -= 1
        if applied is not None:
            pending.settled = applied
        if pending.in_flight:
            return
        del self._pending[relay_id]
        if applied is not None or not self.session.is_active:
            return
        if self.store.generation != pending.generation:
            return
        relay = self.store.get(relay_id)
        if relay is not None and relay.state != pending.settled:
            self.store.apply_optimistic(relay_id, pending.settled)
            self._render()
