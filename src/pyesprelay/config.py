"""Client configuration for pyesprelay."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyesprelay._constants import (
    DEFAULT_CONFIRM_DELAY,
    DEFAULT_POLL_INTERVAL,
    SETUP_NETWORK_NAME,
    USER_AGENT,
)
from pyesprelay.exceptions import RelayConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class RelayClientConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the relay board (e.g. ``"http://esp32-relay.local"``).
    poll_interval : float
        Seconds between two poll ticks.  Defaults to 2 seconds.
    confirm_delay : float
        Seconds to wait after a successful relay command before the
        confirmation poll is issued.
    setup_network_name : str
        WiFi network the board opens after a factory reset.  Shown
        verbatim in the terminal view.
    poll_network_each_tick : bool
        Refresh network info on every tick instead of only on the
        first one.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str
    poll_interval: float = DEFAULT_POLL_INTERVAL
    confirm_delay: float = DEFAULT_CONFIRM_DELAY
    setup_network_name: str = SETUP_NETWORK_NAME
    poll_network_each_tick: bool = False
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        base_url = self.base_url.strip().rstrip("/")
        if not base_url:
            raise RelayConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", base_url)
        if self.poll_interval <= 0:
            raise RelayConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.confirm_delay < 0:
            raise RelayConfigError(f"confirm_delay must not be negative, got {self.confirm_delay}")

    @classmethod
    def from_env(cls, **overrides: Any) -> RelayClientConfig:
        """Create configuration from environment variables.

        Reads ``ESPRELAY_BASE_URL`` and the optional ``ESPRELAY_*``
        tuning variables.  Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RelayClientConfig
            Populated configuration.

        Raises
        ------
        RelayConfigError
            If no base URL is available or a numeric variable is malformed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("ESPRELAY_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        setup_network = env.get("ESPRELAY_SETUP_NETWORK")
        if setup_network is not None:
            config_kwargs["setup_network_name"] = setup_network

        _ENV_FLOAT_MAP = {
            "ESPRELAY_POLL_INTERVAL": "poll_interval",
            "ESPRELAY_CONFIRM_DELAY": "confirm_delay",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise RelayConfigError(f"{env_key} must be a number, got {val!r}") from exc

        if "poll_network_each_tick" not in overrides:
            config_kwargs["poll_network_each_tick"] = _env_bool(env.get("ESPRELAY_POLL_NETWORK"), False)

        config_kwargs.update(overrides)

        if "base_url" not in config_kwargs:
            raise RelayConfigError("ESPRELAY_BASE_URL is not set and no base_url was given")

        return cls(**config_kwargs)
