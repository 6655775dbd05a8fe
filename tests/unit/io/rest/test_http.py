"""Unit tests for HTTPClient.

Tests focus on session management and on translating transport failures and
non-2xx responses into the library's exception types.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from dugout.data.core import MalformedResponseError, ProviderError, RateLimitError
from dugout.data.runtime.rest import HTTPClient


def mock_response(status: int = 200, body=None, *, json_error: bool = False, headers=None):
    response = AsyncMock()
    response.status = status
    response.url = "https://api.example.com/test"
    response.headers = headers or {}
    if json_error:
        response.json = AsyncMock(side_effect=ValueError("not json"))
    else:
        response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value="error body")
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def install_session(client: HTTPClient, **methods) -> MagicMock:
    session = MagicMock()
    session.closed = False
    for name, value in methods.items():
        setattr(session, name, value)
    client._session = session
    return session


class TestHTTPClientSessionManagement:
    def test_init(self):
        client = HTTPClient(base_url="https://api.example.com", timeout=10.0)
        assert client.timeout.total == 10.0
        assert client.base_url == "https://api.example.com"
        assert client._session is None

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        _ = client.session
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None
        assert client._session.closed


class TestHTTPClientGet:
    @pytest.mark.asyncio
    async def test_relative_url_joined_with_base(self):
        client = HTTPClient(base_url="https://api.example.com/v2")
        session = install_session(
            client, get=MagicMock(return_value=mock_response(body={"ok": True}))
        )

        result = await client.get("/players", params={"format": "json"}, headers={"A": "b"})

        assert result == {"ok": True}
        session.get.assert_called_once_with(
            "https://api.example.com/v2/players", params={"format": "json"}, headers={"A": "b"}
        )

    @pytest.mark.asyncio
    async def test_non_2xx_raises_provider_error(self):
        client = HTTPClient()
        install_session(client, get=MagicMock(return_value=mock_response(status=401)))

        with pytest.raises(ProviderError) as exc_info:
            await client.get("https://api.example.com/test")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_429_raises_rate_limit_error(self):
        client = HTTPClient()
        response = mock_response(status=429, headers={"Retry-After": "5"})
        install_session(client, get=MagicMock(return_value=response))

        with pytest.raises(RateLimitError) as exc_info:
            await client.get("https://api.example.com/test")
        assert exc_info.value.retry_after == 5

    @pytest.mark.asyncio
    async def test_timeout_is_a_provider_error(self):
        client = HTTPClient()
        response = mock_response()
        response.__aenter__ = AsyncMock(side_effect=asyncio.TimeoutError())
        install_session(client, get=MagicMock(return_value=response))

        with pytest.raises(ProviderError):
            await client.get("https://api.example.com/test")

    @pytest.mark.asyncio
    async def test_connection_error_is_a_provider_error(self):
        client = HTTPClient()
        install_session(client, get=MagicMock(side_effect=aiohttp.ClientConnectionError("refused")))

        with pytest.raises(ProviderError) as exc_info:
            await client.get("https://api.example.com/test")
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        client = HTTPClient()
        install_session(client, get=MagicMock(return_value=mock_response(json_error=True)))

        with pytest.raises(MalformedResponseError):
            await client.get("https://api.example.com/test")


class TestHTTPClientPostForm:
    @pytest.mark.asyncio
    async def test_returns_status_and_body(self):
        client = HTTPClient()
        response = mock_response(status=400, body={"error": "invalid_grant"})
        session = install_session(client, post=MagicMock(return_value=response))
        auth = aiohttp.BasicAuth("id", "secret")

        status, body = await client.post_form("https://login/token", {"a": "b"}, auth=auth)

        assert status == 400
        assert body == {"error": "invalid_grant"}
        session.post.assert_called_once_with(
            "https://login/token", data={"a": "b"}, auth=auth, headers=None
        )

    @pytest.mark.asyncio
    async def test_non_json_body_is_none(self):
        client = HTTPClient()
        install_session(client, post=MagicMock(return_value=mock_response(json_error=True)))

        status, body = await client.post_form("https://login/revoke", {})
        assert status == 200
        assert body is None
