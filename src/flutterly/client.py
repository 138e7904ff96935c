"""HTTP client for a running flutterly server.

Used by the ``check`` and ``configure`` CLI subcommands.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


class FlutterlyClient:
    """Talks to the bedrock routes of a flutterly server."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:7600",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> FlutterlyClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    async def check_bedrock(self) -> tuple[bool, str]:
        """Ask the server whether a bedrock token is configured.

        Returns:
            ``(configured, body)`` where ``configured`` is True on HTTP 200.
        """
        resp = await self._request("GET", "/check-bedrock")
        return resp.status_code == 200, resp.text

    async def configure_bedrock(self, token: str) -> tuple[bool, str | None]:
        """Send a token to the server.

        Returns:
            ``(ok, error)`` as reported by the server.
        """
        resp = await self._request("POST", "/configure-bedrock", json={"token": token})
        try:
            data = resp.json()
        except ValueError as e:
            raise ClientError(
                f"Unexpected response from /configure-bedrock: HTTP {resp.status_code}"
            ) from e
        return bool(data.get("ok")), data.get("error")

    async def _request(self, method: str, path: str, **kwargs: object) -> httpx.Response:
        if self._client is None:
            raise ClientError("Not connected to server")
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ClientError(f"HTTP request to {path} failed: {e}") from e
        logger.debug("%s %s -> %d", method, path, resp.status_code)
        return resp


class ClientError(Exception):
    """Raised when the server cannot be reached or answers unexpectedly."""
