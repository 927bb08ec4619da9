"""Data models for relay board responses."""

from pyesprelay.models._base import DeviceModel
from pyesprelay.models.command_responses import CommandAck
from pyesprelay.models.messaging import MessagingInfo
from pyesprelay.models.network import NetworkInfo, WifiStatus
from pyesprelay.models.relay import Relay, RelayCollection, RelayListResponse

__all__ = [
    "CommandAck",
    "DeviceModel",
    "MessagingInfo",
    "NetworkInfo",
    "Relay",
    "RelayCollection",
    "RelayListResponse",
    "WifiStatus",
]
