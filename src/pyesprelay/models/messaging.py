"""MQTT broker connectivity model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pyesprelay.models._base import DeviceModel, blank_to_none


class MessagingInfo(DeviceModel):
    """Body of ``GET /api/mqtt``.

    The firmware reports an empty server string and port ``0`` when no
    broker is configured; both are normalized to ``None``.
    """

    connected: bool
    server: str | None = None
    port: int | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @field_validator("server", mode="before")
    @classmethod
    def _blank_server(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("port", mode="before")
    @classmethod
    def _zero_port(cls, value: Any) -> Any:
        value = blank_to_none(value)
        if value == 0:
            return None
        return value
