from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyesprelay.client import RelayDeviceClient
from pyesprelay.config import RelayClientConfig
from pyesprelay.exceptions import RelayDecodeError, RelayError, RelayTransportError
from pyesprelay.models import Relay


@dataclass
class FakeBoardBackend:
    calls: list[tuple[str, str, Any]] = field(default_factory=list)
    statuses: dict[str, int] = field(default_factory=dict)
    bodies: dict[str, Any] = field(
        default_factory=lambda: {
            "/api/relays": {
                "relays": [
                    {"id": 1, "name": "Relay 1", "state": False, "pin": 13},
                    {"id": 2, "name": "Relay 2", "state": True, "pin": 12},
                ]
            },
            "/api/wifi": {"ssid": "HomeNet", "ip": "192.168.1.40", "rssi": -48, "hostname": "esp32-relay.local"},
            "/api/wifi/status": {"connected": True, "ap_mode": False, "ssid": "HomeNet", "ip": "192.168.1.40", "rssi": -48},
            "/api/mqtt": {"server": "192.168.68.100", "port": 1883, "connected": True},
        }
    )

    async def get_json(self, endpoint: str) -> Any:
        self.calls.append(("GET", endpoint, None))
        status = self.statuses.get(endpoint, 200)
        if status != 200:
            raise RelayTransportError(f"HTTP {status} from {endpoint}", status_code=status, endpoint=endpoint)
        return self.bodies[endpoint]

    async def post_json(self, endpoint: str, body: Mapping[str, Any] | None = None) -> int:
        self.calls.append(("POST", endpoint, dict(body) if body is not None else None))
        status = self.statuses.get(endpoint, 200)
        if status != 200:
            raise RelayTransportError(f"HTTP {status} from {endpoint}", status_code=status, endpoint=endpoint)
        return status


@pytest.fixture
def config() -> RelayClientConfig:
    return RelayClientConfig(base_url="http://esp32-relay.local")


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeBoardBackend:
    fake_backend = FakeBoardBackend()

    async def fake_get_json(_self: Any, endpoint: str) -> Any:
        return await fake_backend.get_json(endpoint)

    async def fake_post_json(_self: Any, endpoint: str, body: Mapping[str, Any] | None = None) -> int:
        return await fake_backend.post_json(endpoint, body)

    monkeypatch.setattr("pyesprelay._transport.HttpTransport.get_json", fake_get_json)
    monkeypatch.setattr("pyesprelay._transport.HttpTransport.post_json", fake_post_json)
    return fake_backend


@pytest.mark.asyncio
async def test_client_reads_every_endpoint(config: RelayClientConfig, backend: FakeBoardBackend) -> None:
    async with RelayDeviceClient(config) as client:
        relays = await client.fetch_relays()
        network = await client.fetch_network_info()
        status = await client.fetch_wifi_status()
        messaging = await client.fetch_messaging_info()

    assert relays == (
        Relay(id=1, name="Relay 1", pin=13, state=False),
        Relay(id=2, name="Relay 2", pin=12, state=True),
    )
    assert network.rssi == -48
    assert status.connected is True
    assert messaging.server == "192.168.68.100"
    assert messaging.port == 1883
    assert [call[1] for call in backend.calls] == ["/api/relays", "/api/wifi", "/api/wifi/status", "/api/mqtt"]


@pytest.mark.asyncio
async def test_set_relay_sends_command_body(config: RelayClientConfig, backend: FakeBoardBackend) -> None:
    async with RelayDeviceClient(config) as client:
        ack = await client.set_relay(2, False)

    assert ack.ok is True
    assert backend.calls == [("POST", "/api/relay", {"relay": 2, "state": False})]


@pytest.mark.asyncio
async def test_set_relay_rejected_by_board(config: RelayClientConfig, backend: FakeBoardBackend) -> None:
    backend.statuses["/api/relay"] = 400

    async with RelayDeviceClient(config) as client:
        with pytest.raises(RelayTransportError) as exc_info:
            await client.set_relay(99, True)

    assert exc_info.value.status_code == 400
    assert exc_info.value.endpoint == "/api/relay"


@pytest.mark.asyncio
async def test_malformed_relay_payload(config: RelayClientConfig, backend: FakeBoardBackend) -> None:
    backend.bodies["/api/relays"] = {"relays": [{"id": "one"}]}

    async with RelayDeviceClient(config) as client:
        with pytest.raises(RelayDecodeError):
            await client.fetch_relays()


@pytest.mark.asyncio
async def test_system_commands(config: RelayClientConfig, backend: FakeBoardBackend) -> None:
    async with RelayDeviceClient(config) as client:
        reset = await client.request_factory_reset()
        restart = await client.restart_device()
        reconfigure = await client.reconfigure_wifi("Garage", "pw123456")

    assert reset.endpoint == "/api/reset"
    assert restart.endpoint == "/api/restart"
    assert reconfigure.ok is True
    assert backend.calls == [
        ("POST", "/api/reset", None),
        ("POST", "/api/restart", None),
        ("POST", "/api/wifi/reconfigure", {"ssid": "Garage", "password": "pw123456"}),
    ]


@pytest.mark.asyncio
async def test_reconfigure_wifi_requires_ssid(config: RelayClientConfig, backend: FakeBoardBackend) -> None:
    async with RelayDeviceClient(config) as client:
        with pytest.raises(ValueError):
            await client.reconfigure_wifi("  ", "pw")

    assert backend.calls == []


@pytest.mark.asyncio
async def test_client_requires_context_manager(config: RelayClientConfig) -> None:
    client = RelayDeviceClient(config)

    with pytest.raises(RelayError):
        await client.fetch_relays()
