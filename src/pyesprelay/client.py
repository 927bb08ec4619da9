"""High-level async client for the relay board HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyesprelay._api import connectivity as _connectivity_api
from pyesprelay._api import relays as _relays_api
from pyesprelay._api import system as _system_api
from pyesprelay._transport import HttpTransport
from pyesprelay.config import RelayClientConfig
from pyesprelay.exceptions import RelayError
from pyesprelay.models.command_responses import CommandAck
from pyesprelay.models.messaging import MessagingInfo
from pyesprelay.models.network import NetworkInfo, WifiStatus
from pyesprelay.models.relay import RelayCollection

_logger = logging.getLogger(__name__)


class RelayDeviceClient:
    """Async client for the relay board.

    Stateless apart from the HTTP session: every method is one
    independent request/response round trip.  No method retries.

    Usage::

        async with RelayDeviceClient(config) as client:
            relays = await client.fetch_relays()
            await client.set_relay(relays[0].id, True)
    """

    def __init__(
        self,
        config: RelayClientConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    @property
    def config(self) -> RelayClientConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RelayDeviceClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise RelayError("Client not initialized. Use 'async with RelayDeviceClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def fetch_relays(self) -> RelayCollection:
        """Return all relays in the order the board reports them."""
        return await _relays_api.fetch_relays(self._require_transport())

    async def fetch_network_info(self) -> NetworkInfo:
        return await _connectivity_api.fetch_network_info(self._require_transport())

    async def fetch_wifi_status(self) -> WifiStatus:
        return await _connectivity_api.fetch_wifi_status(self._require_transport())

    async def fetch_messaging_info(self) -> MessagingInfo:
        return await _connectivity_api.fetch_messaging_info(self._require_transport())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def set_relay(self, relay_id: int, state: bool) -> CommandAck:
        """Switch relay *relay_id* on or off."""
        return await _relays_api.set_relay(self._require_transport(), relay_id, state)

    async def reconfigure_wifi(self, ssid: str, password: str) -> CommandAck:
        return await _connectivity_api.reconfigure_wifi(self._require_transport(), ssid, password)

    async def request_factory_reset(self) -> CommandAck:
        """Erase network settings.  The board becomes unreachable shortly after."""
        return await _system_api.request_factory_reset(self._require_transport())

    async def restart_device(self) -> CommandAck:
        return await _system_api.restart_device(self._require_transport())
