"""Unit tests for CredentialStore refresh lifecycle."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import asyncio

import aiohttp
import pytest

from dugout.data.auth import CredentialStore
from dugout.data.core import ProviderError, SessionExpiredError, TokenRefreshError
from dugout.data.models import REFRESH_ACCESS_TOKEN_ERROR, Credential
from dugout.data.runtime.rest import HTTPClient

NOW = 1000.0


@pytest.fixture
def token_http():
    http = MagicMock(spec=HTTPClient)
    http.post_form = AsyncMock(
        return_value=(200, {"access_token": "access-2", "expires_in": 3600, "token_type": "bearer"})
    )
    http.close = AsyncMock()
    return http


def make_store(credential, http, on_sign_out=None) -> CredentialStore:
    return CredentialStore(
        credential,
        client_id="client",
        client_secret="secret",
        http=http,
        on_sign_out=on_sign_out,
        clock=lambda: NOW,
    )


class TestGetValid:
    @pytest.mark.asyncio
    async def test_unexpired_credential_returned_unchanged(self, valid_credential, token_http):
        store = make_store(valid_credential, token_http)

        assert await store.get_valid() is valid_credential
        token_http.post_form.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_credential_refreshed_once(self, expired_credential, token_http):
        store = make_store(expired_credential, token_http)

        cred = await store.get_valid()

        assert cred.access_token == "access-2"
        assert cred.expires_at == int(NOW + 3600)
        # No new refresh token issued: keep the old one
        assert cred.refresh_token == "refresh-1"
        assert store.credential == cred
        token_http.post_form.assert_awaited_once()

        url, form = token_http.post_form.await_args.args
        assert url == "https://api.login.yahoo.com/oauth2/get_token"
        assert form == {"grant_type": "refresh_token", "refresh_token": "refresh-1"}
        assert token_http.post_form.await_args.kwargs["auth"] == aiohttp.BasicAuth(
            "client", "secret"
        )

    @pytest.mark.asyncio
    async def test_refresh_token_rotated_when_issued(self, expired_credential, token_http):
        token_http.post_form.return_value = (
            200,
            {"access_token": "access-2", "expires_in": 60, "refresh_token": "refresh-2"},
        )
        store = make_store(expired_credential, token_http)

        cred = await store.get_valid()
        assert cred.refresh_token == "refresh-2"

    @pytest.mark.asyncio
    async def test_expired_without_refresh_token_passes_through(self, token_http):
        cred = Credential(access_token="old", expires_at=1)
        store = make_store(cred, token_http)

        assert await store.get_valid() is cred
        token_http.post_form.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signed_out_store_raises(self, token_http):
        store = make_store(None, token_http)
        with pytest.raises(SessionExpiredError):
            await store.get_valid()

    @pytest.mark.asyncio
    async def test_auth_headers(self, valid_credential, token_http):
        store = make_store(valid_credential, token_http)
        headers = await store.auth_headers()
        assert headers["Authorization"] == "Bearer access-1"


class TestRefreshFailure:
    @pytest.mark.asyncio
    async def test_invalid_grant_poisons_and_signs_out_once(self, expired_credential, token_http):
        token_http.post_form.return_value = (
            400,
            {"error": "invalid_grant", "error_description": "refresh token expired"},
        )
        on_sign_out = MagicMock()
        store = make_store(expired_credential, token_http, on_sign_out)

        with pytest.raises(SessionExpiredError) as exc_info:
            await store.get_valid()

        cause = exc_info.value.__cause__
        assert isinstance(cause, TokenRefreshError)
        assert cause.error_code == "invalid_grant"
        assert cause.status_code == 400
        assert store.credential.error == REFRESH_ACCESS_TOKEN_ERROR
        assert store.has_error
        on_sign_out.assert_called_once()

        # Later accesses fail without touching the token endpoint again
        with pytest.raises(SessionExpiredError):
            await store.get_valid()
        with pytest.raises(SessionExpiredError):
            await store.auth_headers()
        assert token_http.post_form.await_count == 1
        on_sign_out.assert_called_once()

    @pytest.mark.asyncio
    async def test_transport_failure_is_terminal(self, expired_credential, token_http):
        token_http.post_form.side_effect = ProviderError("unreachable")
        store = make_store(expired_credential, token_http)

        with pytest.raises(TokenRefreshError):
            await store.refresh()
        assert store.has_error
        assert not store.is_valid()

    @pytest.mark.asyncio
    async def test_malformed_success_body_is_a_failure(self, expired_credential, token_http):
        token_http.post_form.return_value = (200, {"token_type": "bearer"})
        store = make_store(expired_credential, token_http)

        with pytest.raises(SessionExpiredError):
            await store.get_valid()
        assert store.has_error

    @pytest.mark.asyncio
    async def test_async_sign_out_callback_awaited(self, expired_credential, token_http):
        token_http.post_form.return_value = (401, None)
        on_sign_out = AsyncMock()
        store = make_store(expired_credential, token_http, on_sign_out)

        with pytest.raises(SessionExpiredError):
            await store.get_valid()
        on_sign_out.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sync_callback_return_value_ignored(self, expired_credential, token_http):
        token_http.post_form.return_value = (400, {"error": "invalid_grant"})
        on_sign_out = MagicMock(return_value=True)
        store = make_store(expired_credential, token_http, on_sign_out)

        with pytest.raises(SessionExpiredError):
            await store.get_valid()
        on_sign_out.assert_called_once()

    @pytest.mark.asyncio
    async def test_sign_in_clears_error(self, expired_credential, valid_credential, token_http):
        token_http.post_form.return_value = (400, {"error": "invalid_grant"})
        store = make_store(expired_credential, token_http)
        with pytest.raises(SessionExpiredError):
            await store.get_valid()

        store.sign_in(valid_credential)
        assert store.is_valid()
        assert await store.get_valid() is valid_credential


class TestSignOut:
    @pytest.mark.asyncio
    async def test_sign_out_revokes_and_drops_credential(self, valid_credential, token_http):
        token_http.post_form.return_value = (200, None)
        on_sign_out = MagicMock()
        store = make_store(valid_credential, token_http, on_sign_out)

        await store.sign_out()

        url, form = token_http.post_form.await_args.args
        assert url == "https://api.login.yahoo.com/oauth2/revoke"
        assert form == {"token": "access-1"}
        assert store.credential is None
        on_sign_out.assert_called_once()

    @pytest.mark.asyncio
    async def test_revoke_failure_is_not_raised(self, valid_credential, token_http):
        token_http.post_form.side_effect = ProviderError("down")
        store = make_store(valid_credential, token_http)

        await store.sign_out()
        assert store.credential is None

    @pytest.mark.asyncio
    async def test_close_leaves_injected_http_open(self, valid_credential, token_http):
        store = make_store(valid_credential, token_http)
        await store.close()
        token_http.close.assert_not_awaited()


class TestOverlappingRefresh:
    @staticmethod
    def held_then_failing_http(release: asyncio.Event) -> MagicMock:
        """First exchange waits for ``release`` then succeeds; the second is rejected."""
        calls = 0

        async def post_form(url, form, auth=None):
            nonlocal calls
            calls += 1
            if calls == 1:
                await release.wait()
                return 200, {"access_token": "access-late", "expires_in": 3600}
            return 400, {"error": "invalid_grant"}

        http = MagicMock(spec=HTTPClient)
        http.post_form = AsyncMock(side_effect=post_form)
        return http

    @pytest.mark.asyncio
    async def test_late_success_does_not_revive_poisoned_session(self, expired_credential):
        release = asyncio.Event()
        http = self.held_then_failing_http(release)
        on_sign_out = MagicMock()
        store = make_store(expired_credential, http, on_sign_out)

        slow = asyncio.create_task(store.get_valid())
        await asyncio.sleep(0)
        with pytest.raises(SessionExpiredError):
            await store.get_valid()

        release.set()
        with pytest.raises(SessionExpiredError):
            await slow

        assert store.has_error
        assert store.credential.error == REFRESH_ACCESS_TOKEN_ERROR
        on_sign_out.assert_called_once()
        with pytest.raises(SessionExpiredError):
            await store.auth_headers()

    @pytest.mark.asyncio
    async def test_late_success_does_not_restore_signed_out_session(self, expired_credential):
        release = asyncio.Event()
        http = self.held_then_failing_http(release)
        store = make_store(expired_credential, http)

        slow = asyncio.create_task(store.refresh())
        await asyncio.sleep(0)
        await store.sign_out()

        release.set()
        with pytest.raises(SessionExpiredError):
            await slow
        assert store.credential is None
