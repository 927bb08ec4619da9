"""pyesprelay - Async Python client for ESP32 relay boards."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyesprelay")
except PackageNotFoundError:
    __version__ = "0+local"
from pyesprelay.client import RelayDeviceClient
from pyesprelay.config import RelayClientConfig
from pyesprelay.dashboard import RelayDashboard
from pyesprelay.exceptions import (
    RelayConfigError,
    RelayDecodeError,
    RelayError,
    RelaySessionStoppedError,
    RelayTransportError,
)
from pyesprelay.models import (
    CommandAck,
    MessagingInfo,
    NetworkInfo,
    Relay,
    RelayCollection,
    WifiStatus,
)
from pyesprelay.presenter import DashboardView, SignalQuality, TerminalView, present, signal_quality
from pyesprelay.reset import ResetFlow, ResetOutcome
from pyesprelay.scheduler import SyncScheduler
from pyesprelay.session import SessionPhase, SyncSession
from pyesprelay.state.commands import RelayCommand, RequestReset, ToggleRelay
from pyesprelay.state.store import ConnectivityState, RelayStateStore

__all__ = [
    "__version__",
    "CommandAck",
    "ConnectivityState",
    "DashboardView",
    "MessagingInfo",
    "NetworkInfo",
    "Relay",
    "RelayClientConfig",
    "RelayCollection",
    "RelayCommand",
    "RelayConfigError",
    "RelayDashboard",
    "RelayDecodeError",
    "RelayDeviceClient",
    "RelayError",
    "RelaySessionStoppedError",
    "RelayStateStore",
    "RelayTransportError",
    "RequestReset",
    "ResetFlow",
    "ResetOutcome",
    "SessionPhase",
    "SignalQuality",
    "SyncScheduler",
    "SyncSession",
    "TerminalView",
    "ToggleRelay",
    "WifiStatus",
    "present",
    "signal_quality",
]
