#!/usr/bin/env python3
"""Command-line console for an ESP32 relay board.

Usage
-----
Point the script at a board and pick a command::

    export ESPRELAY_BASE_URL="http://esp32-relay.local"
    python scripts/relay_console.py status
    python scripts/relay_console.py set 3 on
    python scripts/relay_console.py watch
    python scripts/relay_console.py reset --yes

Commands::

    status              Print relays, WiFi and MQTT status once
    set ID on|off       Switch one relay
    watch               Poll continuously and redraw on every change
    reset [--yes]       Factory reset (asks for confirmation unless --yes)
    restart             Reboot the board
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyesprelay import (  # noqa: E402
    DashboardView,
    RelayClientConfig,
    RelayDashboard,
    RelayDeviceClient,
    RelayError,
    RequestReset,
    ResetOutcome,
    TerminalView,
    present,
)
from pyesprelay.session import SessionPhase  # noqa: E402

# ── rendering ────────────────────────────────────────────────


def _render(view: DashboardView | TerminalView) -> str:
    if isinstance(view, TerminalView):
        return f"\n  {view.title}\n  {view.message}\n"

    lines: list[str] = []
    if view.network is not None:
        net = view.network
        lines.append(f"  WiFi  : {net.ssid} ({net.ip}, {net.hostname}) {net.rssi} dBm [{net.signal}]")
    if view.messaging is not None:
        mqtt = view.messaging
        lines.append(f"  MQTT  : {mqtt.status_label} {mqtt.server}:{mqtt.port}")
    lines.append("")
    if view.loading:
        lines.append(f"  {view.loading_text}")
    for card in view.relays:
        marker = "●" if card.active else "○"
        pin = card.pin if card.pin is not None else "-"
        lines.append(f"  {marker} R{card.relay_id:<3} {card.name:<20} GPIO {pin:<3} {card.state_label}")
    return "\n".join(lines)


def _ask(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


# ── commands ─────────────────────────────────────────────────


async def cmd_status(client: RelayDeviceClient, args: argparse.Namespace) -> int:
    relays, network, messaging = await asyncio.gather(
        client.fetch_relays(),
        client.fetch_network_info(),
        client.fetch_messaging_info(),
    )
    if args.json_mode:
        payload = {
            "relays": [relay.model_dump() for relay in relays],
            "wifi": network.model_dump(exclude={"raw"}),
            "mqtt": messaging.model_dump(exclude={"raw"}),
        }
        print(json.dumps(payload, indent=2))
    else:
        print(_render(present(relays, network, messaging, SessionPhase.ACTIVE)))
    return 0


async def cmd_set(client: RelayDeviceClient, args: argparse.Namespace) -> int:
    await client.set_relay(args.relay_id, args.state == "on")
    print(f"Relay {args.relay_id} -> {args.state.upper()}")
    return 0


async def cmd_watch(client: RelayDeviceClient, args: argparse.Namespace) -> int:
    def on_render(view: DashboardView | TerminalView) -> None:
        print("\033[2J\033[H" + _render(view), flush=True)

    async with RelayDashboard(client, client.config, on_render=on_render):
        await asyncio.Event().wait()
    return 0


async def cmd_reset(client: RelayDeviceClient, args: argparse.Namespace) -> int:
    confirm = (lambda _prompt: True) if args.yes else _ask
    async with RelayDashboard(client, client.config, confirm=confirm, alert=print) as dashboard:
        outcome = await dashboard.dispatch(RequestReset())
        if outcome is ResetOutcome.COMPLETED:
            print(_render(dashboard.view()))
    return 0 if outcome is not ResetOutcome.FAILED else 1


async def cmd_restart(client: RelayDeviceClient, args: argparse.Namespace) -> int:
    await client.restart_device()
    print("Restart requested")
    return 0


_COMMANDS = {
    "status": cmd_status,
    "set": cmd_set,
    "watch": cmd_watch,
    "reset": cmd_reset,
    "restart": cmd_restart,
}


async def main() -> int:
    parser = argparse.ArgumentParser(description="Control an ESP32 relay board.")
    parser.add_argument("--url", help="Board base URL (default: $ESPRELAY_BASE_URL)")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds for 'watch'")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Print relays, WiFi and MQTT status")
    status.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")

    set_parser = sub.add_parser("set", help="Switch one relay")
    set_parser.add_argument("relay_id", type=int)
    set_parser.add_argument("state", choices=["on", "off"])

    sub.add_parser("watch", help="Poll continuously")

    reset = sub.add_parser("reset", help="Factory reset the board")
    reset.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    sub.add_parser("restart", help="Reboot the board")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, object] = {}
    if args.url:
        overrides["base_url"] = args.url
    if args.interval:
        overrides["poll_interval"] = args.interval

    try:
        config = RelayClientConfig.from_env(**overrides)
        async with RelayDeviceClient(config) as client:
            return await _COMMANDS[args.command](client, args)
    except RelayError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)
