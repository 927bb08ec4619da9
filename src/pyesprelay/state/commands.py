"""User command messages.

Input surfaces (a CLI, a UI, tests) translate user gestures into these
messages and hand them to :meth:`pyesprelay.dashboard.RelayDashboard.dispatch`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToggleRelay:
    """Drive one relay to ``state``."""

    relay_id: int
    state: bool


@dataclass(frozen=True, slots=True)
class RequestReset:
    """Start the factory reset flow (still subject to confirmation)."""


RelayCommand = ToggleRelay | RequestReset
