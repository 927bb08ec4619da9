"""In-memory caches of board state.

:class:`RelayStateStore` is the only owner of the relay collection.
Poll results replace it wholesale; user actions patch a single relay
optimistically until the next poll reconciles it.
"""

from __future__ import annotations

import logging

from pyesprelay.models.messaging import MessagingInfo
from pyesprelay.models.network import NetworkInfo
from pyesprelay.models.relay import Relay, RelayCollection

_logger = logging.getLogger(__name__)


class RelayStateStore:
    """Cache of the last-known relay collection.

    Order is the board's order and is never changed by an optimistic
    update.  ``generation`` increases on every :meth:`replace_all`, so a
    caller holding an older generation can tell that a poll has landed
    since it last looked.
    """

    def __init__(self) -> None:
        self._relays: list[Relay] = []
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def replace_all(self, relays: RelayCollection) -> None:
        """Overwrite the cache with an authoritative poll result.

        Always wins over optimistic state applied earlier.
        """
        self._relays = list(relays)
        self._generation += 1

    def apply_optimistic(self, relay_id: int, state: bool) -> bool | None:
        """Set the cached state of *relay_id* in place.

        Returns the previous state, or ``None`` when no relay with that
        id is cached (the call is then a no-op).
        """
        for index, relay in enumerate(self._relays):
            if relay.id == relay_id:
                self._relays[index] = relay.with_state(state)
                return relay.state
        _logger.debug("Optimistic update for unknown relay %s ignored", relay_id)
        return None

    def get(self, relay_id: int) -> Relay | None:
        for relay in self._relays:
            if relay.id == relay_id:
                return relay
        return None

    def current(self) -> RelayCollection:
        """Read-only snapshot for presentation."""
        return tuple(self._relays)


class ConnectivityState:
    """Last network and MQTT status reported by the board.

    A mirror only: values come from polls and are never edited locally.
    """

    def __init__(self) -> None:
        self.network: NetworkInfo | None = None
        self.messaging: MessagingInfo | None = None

    def update_network(self, info: NetworkInfo) -> None:
        self.network = info

    def update_messaging(self, info: MessagingInfo) -> None:
        self.messaging = info
