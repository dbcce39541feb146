"""HTTP transport for the clipboard service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from clipstore._constants import CONTENT_TYPE
from clipstore._decoder import DecodedResponse, decode_response, is_success
from clipstore._redact import redact_for_log
from clipstore.config import ClipStoreConfig
from clipstore.exceptions import ClipStoreDecodeError, ClipStoreTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
    ) -> DecodedResponse:
        ...


class HttpTransport:
    """Issues one JSON request per call and decodes the reply.

    When constructed without an ``aiohttp.ClientSession`` every request
    opens and closes its own session, so nothing is held between calls.
    """

    def __init__(
        self,
        config: ClipStoreConfig,
        http_session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._http = http_session

    def _headers(self) -> dict[str, str]:
        return {
            "accept": CONTENT_TYPE,
            "content-type": CONTENT_TYPE,
            "user-agent": self._config.user_agent,
        }

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
    ) -> DecodedResponse:
        """Send *method* to *endpoint* and return the decoded JSON reply.

        1. JSON-encode *body* (if any)
        2. Send it with JSON content headers
        3. Read the reply as text
        4. Hand status + text to :func:`clipstore._decoder.decode_response`
        """
        url = f"{self._config.base_url}{endpoint}"
        data = json.dumps(body, separators=(",", ":")) if body is not None else None

        _logger.debug("%s %s body=%s", method, url, redact_for_log(body))

        if self._http is not None:
            status, text = await self._send(self._http, method, url, endpoint, data)
        else:
            async with aiohttp.ClientSession() as http:
                status, text = await self._send(http, method, url, endpoint, data)

        _logger.debug("%s %s -> HTTP %d (%d chars)", method, url, status, len(text))
        return decode_response(status, text, endpoint)

    async def _send(
        self,
        http: aiohttp.ClientSession,
        method: str,
        url: str,
        endpoint: str,
        data: str | None,
    ) -> tuple[int, str]:
        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
        try:
            async with http.request(method, url, data=data, headers=self._headers(), timeout=timeout) as resp:
                status = resp.status
                try:
                    return status, await resp.text()
                except UnicodeDecodeError as exc:
                    if not is_success(status):
                        raise ClipStoreTransportError(
                            f"HTTP {status} from {endpoint}: <undecodable body>",
                            status_code=status,
                            endpoint=endpoint,
                        ) from exc
                    raise ClipStoreDecodeError(
                        f"Undecodable body from {endpoint} (HTTP {status})",
                        status_code=status,
                        endpoint=endpoint,
                    ) from exc
        except aiohttp.ClientError as exc:
            raise ClipStoreTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise ClipStoreTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
