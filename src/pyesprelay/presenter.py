"""View models for the relay dashboard.

:func:`present` is a pure transform from the stores' current contents to
a renderable structure.  Nothing here performs I/O or mutates state.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pyesprelay._constants import SETUP_NETWORK_NAME
from pyesprelay.models.messaging import MessagingInfo
from pyesprelay.models.network import NetworkInfo
from pyesprelay.models.relay import Relay, RelayCollection
from pyesprelay.session import SessionPhase
from pyesprelay.state.commands import ToggleRelay

LOADING_TEXT = "Loading relays..."
SERVER_PLACEHOLDER = "Not configured"
PORT_PLACEHOLDER = "--"
TERMINAL_TITLE = "Device Restarting..."


class SignalQuality(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    WEAK = "Weak"


# (exclusive lower bound in dBm, bucket), strongest first
_SIGNAL_THRESHOLDS: tuple[tuple[int, SignalQuality], ...] = (
    (-50, SignalQuality.EXCELLENT),
    (-60, SignalQuality.GOOD),
    (-70, SignalQuality.FAIR),
)


def signal_quality(rssi: int) -> SignalQuality:
    """Bucket an RSSI reading.

    Each bound is exclusive: -50 dBm is ``GOOD``, -49 dBm is ``EXCELLENT``.
    """
    for bound, quality in _SIGNAL_THRESHOLDS:
        if rssi > bound:
            return quality
    return SignalQuality.WEAK


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class RelayCard(_View):
    relay_id: int
    name: str
    pin: int | None
    active: bool
    state_label: str
    toggle_label: str
    toggle: ToggleRelay


class NetworkView(_View):
    ssid: str
    ip: str
    hostname: str
    rssi: int
    signal: SignalQuality


class MessagingView(_View):
    connected: bool
    status_label: str
    server: str
    port: str


class DashboardView(_View):
    """Normal view.  ``relays`` is empty exactly when ``loading`` is set."""

    loading: bool
    loading_text: str | None = None
    relays: tuple[RelayCard, ...] = ()
    network: NetworkView | None = None
    messaging: MessagingView | None = None


class TerminalView(_View):
    """Shown after a factory reset instead of everything else."""

    title: str
    message: str
    setup_network_name: str


def relay_card(relay: Relay) -> RelayCard:
    return RelayCard(
        relay_id=relay.id,
        name=relay.name,
        pin=relay.pin,
        active=relay.state,
        state_label="ON" if relay.state else "OFF",
        toggle_label="Turn OFF" if relay.state else "Turn ON",
        toggle=ToggleRelay(relay_id=relay.id, state=not relay.state),
    )


def network_view(info: NetworkInfo) -> NetworkView:
    return NetworkView(
        ssid=info.ssid,
        ip=info.ip,
        hostname=info.hostname,
        rssi=info.rssi,
        signal=signal_quality(info.rssi),
    )


def messaging_view(info: MessagingInfo) -> MessagingView:
    return MessagingView(
        connected=info.connected,
        status_label="Connected" if info.connected else "Disconnected",
        server=info.server or SERVER_PLACEHOLDER,
        port=str(info.port) if info.port is not None else PORT_PLACEHOLDER,
    )


def terminal_view(setup_network_name: str = SETUP_NETWORK_NAME) -> TerminalView:
    return TerminalView(
        title=TERMINAL_TITLE,
        message=f'Please connect to "{setup_network_name}" WiFi to reconfigure.',
        setup_network_name=setup_network_name,
    )


def present(
    relays: RelayCollection,
    network: NetworkInfo | None,
    messaging: MessagingInfo | None,
    phase: SessionPhase,
    *,
    setup_network_name: str = SETUP_NETWORK_NAME,
) -> DashboardView | TerminalView:
    """Build the view for the current state.

    After a factory reset only the terminal view is produced.  An empty
    relay collection means nothing has been polled yet and renders the
    loading placeholder.
    """
    if phase is SessionPhase.RESET:
        return terminal_view(setup_network_name)

    cards = tuple(relay_card(relay) for relay in relays)
    return DashboardView(
        loading=not cards,
        loading_text=None if cards else LOADING_TEXT,
        relays=cards,
        network=network_view(network) if network is not None else None,
        messaging=messaging_view(messaging) if messaging is not None else None,
    )
