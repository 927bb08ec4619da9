"""Typed responses for status-only command endpoints.

The board answers commands with a small JSON acknowledgement, but only
the HTTP status is part of the contract.  :class:`CommandAck` records
that status.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CommandAck(BaseModel):
    """Acknowledgement for a write endpoint."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    status: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
