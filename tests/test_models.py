from __future__ import annotations

import pytest

from pyesprelay._api._common import decode_model
from pyesprelay.exceptions import RelayDecodeError
from pyesprelay.models import CommandAck, MessagingInfo, NetworkInfo, Relay, RelayListResponse, WifiStatus


def test_relay_list_preserves_board_order() -> None:
    payload = {
        "relays": [
            {"id": 3, "name": "Lights", "pin": 14, "state": True},
            {"id": 1, "name": "Pump", "pin": 13, "state": False},
        ]
    }

    response = decode_model(RelayListResponse, payload, "/api/relays")

    assert [relay.id for relay in response.relays] == [3, 1]
    assert response.relays[0] == Relay(id=3, name="Lights", pin=14, state=True)


def test_relay_list_rejects_duplicate_ids() -> None:
    payload = {
        "relays": [
            {"id": 1, "name": "A", "pin": 13, "state": True},
            {"id": 1, "name": "B", "pin": 12, "state": False},
        ]
    }

    with pytest.raises(RelayDecodeError) as exc_info:
        decode_model(RelayListResponse, payload, "/api/relays")
    assert exc_info.value.endpoint == "/api/relays"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"relays": "nope"},
        {"relays": [{"name": "no id", "state": True}]},
        [{"id": 1, "state": True}],
        "garbage",
    ],
)
def test_malformed_relay_payloads_raise_decode_error(payload: object) -> None:
    with pytest.raises(RelayDecodeError):
        decode_model(RelayListResponse, payload, "/api/relays")


def test_with_state_only_changes_state() -> None:
    relay = Relay(id=1, name="Pump", pin=5, state=False)

    switched = relay.with_state(True)

    assert switched == Relay(id=1, name="Pump", pin=5, state=True)
    assert relay.state is False


def test_network_info_keeps_raw_payload() -> None:
    payload = {"ssid": "HomeNet", "ip": "192.168.1.40", "hostname": "esp32-relay.local", "rssi": -61}

    info = decode_model(NetworkInfo, payload, "/api/wifi")

    assert info.rssi == -61
    assert info.hostname == "esp32-relay.local"
    assert info.raw == payload


def test_network_info_requires_rssi() -> None:
    with pytest.raises(RelayDecodeError):
        decode_model(NetworkInfo, {"ssid": "HomeNet"}, "/api/wifi")


def test_messaging_info_normalizes_unconfigured_broker() -> None:
    info = decode_model(MessagingInfo, {"connected": False, "server": "", "port": 0}, "/api/mqtt")

    assert info.connected is False
    assert info.server is None
    assert info.port is None


def test_messaging_info_optional_fields_may_be_missing() -> None:
    info = decode_model(MessagingInfo, {"connected": True}, "/api/mqtt")

    assert info.connected is True
    assert info.server is None
    assert info.port is None


def test_wifi_status_in_access_point_mode() -> None:
    payload = {
        "connected": False,
        "ap_mode": True,
        "ssid": "",
        "ip": "0.0.0.0",
        "rssi": 0,
        "ap_ssid": "ESP32-Relay-Setup",
        "ap_ip": "192.168.4.1",
        "ap_clients": 1,
    }

    status = decode_model(WifiStatus, payload, "/api/wifi/status")

    assert status.ap_mode is True
    assert status.ap_ssid == "ESP32-Relay-Setup"
    assert status.ap_clients == 1


def test_command_ack_ok_reflects_status() -> None:
    assert CommandAck(endpoint="/api/relay", status=200).ok is True
    assert CommandAck(endpoint="/api/relay", status=400).ok is False
