"""Factory reset flow.

Confirm, send the reset, then stop syncing for good.  Once the board has
acknowledged the reset nothing else is sent to it.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Protocol

from pyesprelay._constants import SETUP_NETWORK_NAME
from pyesprelay.exceptions import RelayError, RelaySessionStoppedError
from pyesprelay.models.command_responses import CommandAck
from pyesprelay.scheduler import SyncScheduler
from pyesprelay.session import SessionPhase

_logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "Are you sure you want to reset WiFi and MQTT configuration? The device will restart."
FAILURE_MESSAGE = "Failed to reset configuration. Please try again."

Confirm = Callable[[str], bool | Awaitable[bool]]
Alert = Callable[[str], None]


class ResetTarget(Protocol):
    async def request_factory_reset(self) -> CommandAck:
        ...


class ResetOutcome(StrEnum):
    DECLINED = "declined"
    FAILED = "failed"
    COMPLETED = "completed"
    INTERRUPTED = "interrupted"


def success_message(setup_network_name: str) -> str:
    return (
        "Configuration reset. The device will restart and enter configuration mode. "
        f'Connect to the WiFi network "{setup_network_name}" to reconfigure.'
    )


class ResetFlow:
    """One-shot reset sequence.

    Parameters
    ----------
    target : ResetTarget
        Anything with ``request_factory_reset`` (normally the device client).
    scheduler : SyncScheduler
        Poll scheduler to halt once the reset is acknowledged.
    confirm : callable
        Asked with :data:`CONFIRM_PROMPT`; may be sync or async.  A falsy
        answer aborts without side effects.
    alert : callable
        Receives the user-facing success or failure message.
    setup_network_name : str
        Access point name announced after a successful reset.
    """

    def __init__(
        self,
        target: ResetTarget,
        scheduler: SyncScheduler,
        *,
        confirm: Confirm,
        alert: Alert,
        setup_network_name: str = SETUP_NETWORK_NAME,
    ) -> None:
        self._target = target
        self._scheduler = scheduler
        self._confirm = confirm
        self._alert = alert
        self._setup_network_name = setup_network_name

    async def _ask(self) -> bool:
        answer = self._confirm(CONFIRM_PROMPT)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def run(self) -> ResetOutcome:
        """Execute the flow.

        Raises
        ------
        RelaySessionStoppedError
            If the session already stopped; no prompt is shown.
        """
        session = self._scheduler.session
        if not session.is_active:
            raise RelaySessionStoppedError(f"session is {session.phase}; reset not possible")

        if not await self._ask():
            _logger.info("Factory reset declined")
            return ResetOutcome.DECLINED

        if not session.is_active:
            raise RelaySessionStoppedError(f"session is {session.phase}; reset not possible")

        try:
            await self._target.request_factory_reset()
        except RelayError as exc:
            _logger.error("Factory reset failed: %s", exc)
            self._alert(FAILURE_MESSAGE)
            return ResetOutcome.FAILED

        # Point of no return.
        if not self._scheduler.stop(SessionPhase.RESET):
            # Torn down while the request was in flight; nobody is left to tell.
            _logger.warning("Factory reset acknowledged after the session %s", session.phase)
            return ResetOutcome.INTERRUPTED
        self._alert(success_message(self._setup_network_name))
        return ResetOutcome.COMPLETED
