"""Internal constants shared across the library."""

USER_AGENT = "pyesprelay/1"

# ------------------------------------------------------------------
# Device HTTP surface
# ------------------------------------------------------------------

ENDPOINT_RELAYS = "/api/relays"
ENDPOINT_RELAY = "/api/relay"
ENDPOINT_WIFI = "/api/wifi"
ENDPOINT_WIFI_STATUS = "/api/wifi/status"
ENDPOINT_WIFI_RECONFIGURE = "/api/wifi/reconfigure"
ENDPOINT_MQTT = "/api/mqtt"
ENDPOINT_RESET = "/api/reset"
ENDPOINT_RESTART = "/api/restart"

# ------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------

#: Access point the firmware opens after a factory reset.
SETUP_NETWORK_NAME = "ESP32-Relay-Setup"

#: Seconds between two poll ticks.
DEFAULT_POLL_INTERVAL: float = 2.0

#: Seconds between a successful toggle and the confirmation poll.
DEFAULT_CONFIRM_DELAY: float = 0.1
