"""Custom exception hierarchy for pyesprelay."""

from __future__ import annotations


class RelayError(Exception):
    """Base exception for all pyesprelay errors."""


class RelayConfigError(RelayError):
    """Invalid or missing configuration."""


class RelayTransportError(RelayError):
    """HTTP-level failure (connection error or non-success status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class RelayDecodeError(RelayError):
    """Response body is not JSON or does not match the expected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class RelaySessionStoppedError(RelayError):
    """The sync session has reached its terminal phase.

    Raised when a caller tries to restart a stopped session or dispatch a
    command after a factory reset.  A stopped session is never revived;
    construct a new one instead.
    """
