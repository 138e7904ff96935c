"""Tests for the flutterly HTTP client, run against the app in-process."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from flutterly.bedrock import BedrockScripts, ScriptError
from flutterly.client import ClientError, FlutterlyClient
from flutterly.config.settings import ServerConfig
from flutterly.server import create_app


@pytest.fixture
def mock_scripts() -> AsyncMock:
    return AsyncMock(spec=BedrockScripts)


@pytest.fixture
def transport(server_config: ServerConfig, mock_scripts: AsyncMock) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_app(server_config, scripts=mock_scripts))


class TestFlutterlyClient:
    def test_init_custom_url(self) -> None:
        client = FlutterlyClient(base_url="http://127.0.0.1:7601/")
        assert client._base_url == "http://127.0.0.1:7601"

    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        client = FlutterlyClient()
        with pytest.raises(ClientError, match="Not connected"):
            await client.check_bedrock()

    @pytest.mark.asyncio
    async def test_check_configured(
        self, transport: httpx.ASGITransport, mock_scripts: AsyncMock
    ) -> None:
        mock_scripts.check.return_value = "configured"
        async with FlutterlyClient(base_url="http://test", transport=transport) as client:
            assert await client.check_bedrock() == (True, "configured")

    @pytest.mark.asyncio
    async def test_check_not_configured(
        self, transport: httpx.ASGITransport, mock_scripts: AsyncMock
    ) -> None:
        mock_scripts.check.side_effect = ScriptError("Command failed: check", returncode=1)
        async with FlutterlyClient(base_url="http://test", transport=transport) as client:
            assert await client.check_bedrock() == (False, "not-configured")

    @pytest.mark.asyncio
    async def test_configure_ok(
        self, transport: httpx.ASGITransport, mock_scripts: AsyncMock
    ) -> None:
        async with FlutterlyClient(base_url="http://test", transport=transport) as client:
            assert await client.configure_bedrock(" abc123 ") == (True, None)
        mock_scripts.configure.assert_awaited_once_with("abc123")

    @pytest.mark.asyncio
    async def test_configure_rejected(self, transport: httpx.ASGITransport) -> None:
        async with FlutterlyClient(base_url="http://test", transport=transport) as client:
            assert await client.configure_bedrock("  ") == (False, "Token is required")

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = httpx.MockTransport(refuse)
        async with FlutterlyClient(base_url="http://test", transport=transport) as client:
            with pytest.raises(ClientError, match="/check-bedrock"):
                await client.check_bedrock()

    @pytest.mark.asyncio
    async def test_non_json_configure_response(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(404, text="Not found"))
        async with FlutterlyClient(base_url="http://test", transport=transport) as client:
            with pytest.raises(ClientError, match="HTTP 404"):
                await client.configure_bedrock("abc123")
