"""Relay endpoints: ``GET /api/relays`` and ``POST /api/relay``."""

from __future__ import annotations

import logging

from pyesprelay._api._common import decode_model
from pyesprelay._constants import ENDPOINT_RELAY, ENDPOINT_RELAYS
from pyesprelay._transport import Transport
from pyesprelay.models.command_responses import CommandAck
from pyesprelay.models.relay import RelayCollection, RelayListResponse

_logger = logging.getLogger(__name__)


async def fetch_relays(transport: Transport) -> RelayCollection:
    """Read every relay in board order.

    Raises
    ------
    RelayTransportError
        On connection failure or non-success status.
    RelayDecodeError
        If the body is not ``{"relays": [...]}`` with well-formed entries.
    """
    payload = await transport.get_json(ENDPOINT_RELAYS)
    response = decode_model(RelayListResponse, payload, ENDPOINT_RELAYS)
    _logger.debug("Fetched %d relays", len(response.relays))
    return tuple(response.relays)


async def set_relay(transport: Transport, relay_id: int, state: bool) -> CommandAck:
    """Drive relay *relay_id* to *state*.

    Sending the same desired state twice is harmless; the board simply
    re-applies it.
    """
    body = {"relay": relay_id, "state": bool(state)}
    status = await transport.post_json(ENDPOINT_RELAY, body)
    return CommandAck(endpoint=ENDPOINT_RELAY, status=status)
