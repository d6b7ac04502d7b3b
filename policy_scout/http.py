"""JSON-over-HTTP client shared by the catalog and chain index clients.

Every request is a single blocking GET with a finite timeout. There are no
retries: a failure maps onto one of the structured fetch errors and the
caller decides whether the run aborts.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from policy_scout import __version__
from policy_scout.constants import DEFAULT_TIMEOUT
from policy_scout.errors import BadStatusError, ResponseParseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": f"policy-scout/{__version__}",
    "Accept": "application/json",
}


class JsonClient:
    """HTTP client with connection pooling. Reuse for multiple requests."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                follow_redirects=True,
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> JsonClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def get_json(
        self,
        url: str,
        *,
        stage: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET ``url`` and decode the body as JSON.

        Args:
            url: Absolute URL to fetch.
            stage: Pipeline stage name recorded on any raised error.
            params: Optional query parameters.
            headers: Extra headers for this request only.

        Returns:
            The decoded JSON value.

        Raises:
            TransportError: If no response was received.
            BadStatusError: If the status is outside 200-299.
            ResponseParseError: If the body is not valid JSON.
        """
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self._get_client().get(url, params=params, headers=headers)
        except httpx.RequestError as err:
            raise TransportError(url, str(err) or type(err).__name__, stage) from err

        status = resp.status_code
        logger.debug("GET %s -> %d (%d bytes)", url, status, len(resp.content))
        if status < 200 or status >= 300:
            raise BadStatusError(url, status, stage)

        try:
            return resp.json()
        except ValueError as err:
            raise ResponseParseError(url, f"invalid JSON: {err}", stage) from err
