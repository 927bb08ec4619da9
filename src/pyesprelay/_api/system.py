"""System endpoints: factory reset and restart.

Both endpoints answer before the board reboots, so a successful
acknowledgement is the last thing the client hears from it for a while.
"""

from __future__ import annotations

import logging

from pyesprelay._constants import ENDPOINT_RESET, ENDPOINT_RESTART
from pyesprelay._transport import Transport
from pyesprelay.models.command_responses import CommandAck

_logger = logging.getLogger(__name__)


async def request_factory_reset(transport: Transport) -> CommandAck:
    """Wipe WiFi/MQTT settings; the board restarts into its setup access point."""
    status = await transport.post_json(ENDPOINT_RESET)
    _logger.info("Factory reset acknowledged (HTTP %s)", status)
    return CommandAck(endpoint=ENDPOINT_RESET, status=status)


async def restart_device(transport: Transport) -> CommandAck:
    """Reboot the board.  It comes back on the same network."""
    status = await transport.post_json(ENDPOINT_RESTART)
    _logger.info("Restart acknowledged (HTTP %s)", status)
    return CommandAck(endpoint=ENDPOINT_RESTART, status=status)
