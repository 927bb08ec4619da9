"""WiFi/network models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pyesprelay.models._base import DeviceModel, blank_to_none


class NetworkInfo(DeviceModel):
    """Body of ``GET /api/wifi``.

    ``rssi`` is the received signal strength in dBm (negative integer).
    """

    ssid: str = ""
    ip: str = ""
    hostname: str = ""
    rssi: int
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)


class WifiStatus(DeviceModel):
    """Body of ``GET /api/wifi/status``.

    The ``ap_*`` fields are only reported while the board runs its
    configuration access point.
    """

    connected: bool
    ap_mode: bool = False
    ssid: str = ""
    ip: str = ""
    rssi: int | None = None
    ap_ssid: str | None = None
    ap_ip: str | None = None
    ap_clients: int | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @field_validator("ap_ssid", "ap_ip", mode="before")
    @classmethod
    def _blank_strings(cls, value: Any) -> Any:
        return blank_to_none(value)
