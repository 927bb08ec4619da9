"""HTTP transport for the relay board's JSON API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyesprelay._redact import redact_for_log
from pyesprelay.config import RelayClientConfig
from pyesprelay.exceptions import RelayDecodeError, RelayTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Endpoint modules only depend on this protocol, so tests can pass a
    small fake instead of a real :class:`HttpTransport`.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...

    async def post_json(self, endpoint: str, body: Mapping[str, Any] | None = None) -> int:
        ...


class HttpTransport:
    """aiohttp-backed transport.

    Every round trip either returns a decoded body (``get_json``) or the
    HTTP status (``post_json``).  Any failure is raised as
    :class:`RelayTransportError` or :class:`RelayDecodeError`; aiohttp
    exceptions never leak to callers.
    """

    def __init__(self, config: RelayClientConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _headers(self, *, with_body: bool) -> dict[str, str]:
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        if with_body:
            headers["content-type"] = "application/json"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
    ) -> tuple[int, str]:
        url = f"{self._config.base_url}{endpoint}"
        data = json.dumps(dict(body), separators=(",", ":")) if body is not None else None

        if body is not None:
            _logger.debug("%s %s body=%s", method, url, redact_for_log(dict(body)))
        else:
            _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                headers=self._headers(with_body=body is not None),
            ) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise RelayTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
                return resp.status, text
        except RelayTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RelayTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

    async def get_json(self, endpoint: str) -> Any:
        """GET *endpoint* and return the decoded JSON body."""
        _status, text = await self._request("GET", endpoint)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise RelayDecodeError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

    async def post_json(self, endpoint: str, body: Mapping[str, Any] | None = None) -> int:
        """POST *body* to *endpoint* and return the HTTP status.

        The response body is ignored; success is judged by status alone.
        """
        status, _text = await self._request("POST", endpoint, body)
        return status
