"""Connectivity endpoints: WiFi and MQTT broker status.

Endpoints:
  - GET /api/wifi
  - GET /api/wifi/status
  - POST /api/wifi/reconfigure
  - GET /api/mqtt
"""

from __future__ import annotations

from pyesprelay._api._common import decode_model
from pyesprelay._constants import ENDPOINT_MQTT, ENDPOINT_WIFI, ENDPOINT_WIFI_RECONFIGURE, ENDPOINT_WIFI_STATUS
from pyesprelay._transport import Transport
from pyesprelay.models.command_responses import CommandAck
from pyesprelay.models.messaging import MessagingInfo
from pyesprelay.models.network import NetworkInfo, WifiStatus


async def fetch_network_info(transport: Transport) -> NetworkInfo:
    payload = await transport.get_json(ENDPOINT_WIFI)
    return decode_model(NetworkInfo, payload, ENDPOINT_WIFI)


async def fetch_wifi_status(transport: Transport) -> WifiStatus:
    payload = await transport.get_json(ENDPOINT_WIFI_STATUS)
    return decode_model(WifiStatus, payload, ENDPOINT_WIFI_STATUS)


async def fetch_messaging_info(transport: Transport) -> MessagingInfo:
    payload = await transport.get_json(ENDPOINT_MQTT)
    return decode_model(MessagingInfo, payload, ENDPOINT_MQTT)


async def reconfigure_wifi(transport: Transport, ssid: str, password: str) -> CommandAck:
    """Ask the board to join another WiFi network.

    Raises
    ------
    ValueError
        If *ssid* is blank.  The board rejects that with HTTP 400, so no
        request is sent.
    """
    if not ssid.strip():
        raise ValueError("ssid must be non-empty")
    status = await transport.post_json(ENDPOINT_WIFI_RECONFIGURE, {"ssid": ssid, "password": password})
    return CommandAck(endpoint=ENDPOINT_WIFI_RECONFIGURE, status=status)
