"""Relay models."""

from __future__ import annotations

from pydantic import Field, model_validator

from pyesprelay.models._base import DeviceModel


class Relay(DeviceModel):
    """One switchable output channel on the board.

    Parameters
    ----------
    id : int
        Stable identifier, unique within one poll response.
    name : str
        Display label.
    pin : int or None
        GPIO pin driving the relay.  Informational only.
    state : bool
        ``True`` when the relay is energized.
    """

    id: int
    name: str = ""
    pin: int | None = None
    state: bool

    def with_state(self, state: bool) -> Relay:
        """Return a copy of this relay with *state* replaced."""
        return self.model_copy(update={"state": state})


RelayCollection = tuple[Relay, ...]
"""Ordered relay snapshot.  Order is the order the board reported."""


class RelayListResponse(DeviceModel):
    """Body of ``GET /api/relays``."""

    relays: list[Relay] = Field(...)

    @model_validator(mode="after")
    def _unique_ids(self) -> RelayListResponse:
        seen: set[int] = set()
        for relay in self.relays:
            if relay.id in seen:
                raise ValueError(f"duplicate relay id {relay.id}")
            seen.add(relay.id)
        return self
