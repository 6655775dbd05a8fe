"""Credential lifecycle management.

Architecture:
    The CredentialStore is the only shared mutable object in the pipeline. It
    is read by every fetch (through ``get_valid`` / ``auth_headers``) and
    written only by sign-in, refresh and sign-out.

Design Decisions:
    - Refresh failure is terminal: the credential is poisoned with an error
      flag, the sign-out callback fires exactly once, and every later access
      raises SessionExpiredError without touching the network
    - No lock around refresh: two overlapping refreshes each write an equally
      valid token, so last writer wins.
    - Expired credential without a refresh token is passed through; upstream
      rejects it and that surfaces as an ordinary fetch error.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable, Callable

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from ..connectors.yahoo.config import REVOKE_URL, TOKEN_URL
from ..core.exceptions import ProviderError, SessionExpiredError, TokenRefreshError
from ..models.credential import REFRESH_ACCESS_TOKEN_ERROR, Credential, TokenGrant
from ..runtime.rest import HTTPClient

logger = logging.getLogger(__name__)

SignOutCallback = Callable[[], Awaitable[None]] | Callable[[], None]


class CredentialStore:
    """Holds the bearer credential and refreshes it on demand."""

    def __init__(
        self,
        credential: Credential | None = None,
        *,
        client_id: str,
        client_secret: str,
        http: HTTPClient | None = None,
        on_sign_out: SignOutCallback | None = None,
        clock: Callable[[], float] = time.time,
        token_url: str = TOKEN_URL,
        revoke_url: str = REVOKE_URL,
    ) -> None:
        """Initialize credential store.

        Args:
            credential: Credential obtained at sign-in (None when signed out)
            client_id: OAuth client id
            client_secret: OAuth client secret
            http: HTTP client for the token endpoint (owned by the caller)
            on_sign_out: Side effect run once when the session is forced to end
            clock: Epoch-seconds clock
            token_url: Token endpoint for the refresh grant
            revoke_url: Revocation endpoint used at sign-out
        """
        self._credential = credential
        self._auth = aiohttp.BasicAuth(client_id, client_secret)
        self._http = http or HTTPClient()
        self._owns_http = http is None
        self._on_sign_out = on_sign_out
        self._clock = clock
        self._token_url = token_url
        self._revoke_url = revoke_url
        self._signed_out = False

    @property
    def credential(self) -> Credential | None:
        """Current credential, possibly expired or poisoned."""
        return self._credential

    @property
    def has_error(self) -> bool:
        """Whether the session was poisoned by a failed refresh."""
        return self._credential is not None and self._credential.has_error

    def is_valid(self) -> bool:
        """Whether the credential can be used right now without a refresh."""
        cred = self._credential
        if cred is None or cred.has_error:
            return False
        return not cred.is_expired(self._clock())

    def sign_in(self, credential: Credential) -> None:
        """Install a fresh credential (re-authentication clears any error)."""
        self._credential = credential
        self._signed_out = False

    def ensure_usable(self) -> Credential:
        """Return the credential, or raise SessionExpiredError if no fetch may be issued."""
        cred = self._credential
        if cred is None or cred.has_error:
            raise SessionExpiredError()
        return cred

    async def get_valid(self) -> Credential:
        """Return a credential fit for a request, refreshing if it expired.

        Raises:
            SessionExpiredError: Signed out, or a refresh already failed or
                fails now
        """
        cred = self.ensure_usable()

        if not cred.is_expired(self._clock()):
            return cred

        if not cred.refresh_token:
            return cred

        try:
            refreshed = await self.refresh()
        except TokenRefreshError as e:
            raise SessionExpiredError() from e
        return refreshed

    async def auth_headers(self) -> dict[str, str]:
        """Bearer headers for an upstream request."""
        cred = await self.get_valid()
        return {
            "Authorization": f"Bearer {cred.access_token}",
            "Accept": "application/json",
        }

    async def refresh(self) -> Credential:
        """Exchange the refresh token for a new access token.

        Exactly one exchange is attempted. On failure the credential is
        poisoned and the sign-out side effect fires.

        Raises:
            SessionExpiredError: The credential is already poisoned, or the
                session ended while the exchange was in flight
            TokenRefreshError: The exchange failed
        """
        cred = self.ensure_usable()
        if not cred.refresh_token:
            raise TokenRefreshError("No refresh token available")

        try:
            grant = await self._exchange(cred.refresh_token)
        except TokenRefreshError as e:
            logger.error(
                f"Error refreshing access token: {e}",
                extra={"error_code": e.error_code, "status_code": e.status_code},
            )
            await self.invalidate()
            raise

        # A concurrent refresh may have failed or the user signed out meanwhile
        base = self._credential
        if base is None or base.has_error:
            logger.info("Discarding token grant for an ended session")
            raise SessionExpiredError()
        updated = Credential(
            access_token=grant.access_token,
            refresh_token=grant.refresh_token or base.refresh_token,
            expires_at=int(self._clock() + grant.expires_in),
        )
        self._credential = updated
        logger.info("Access token refreshed", extra={"expires_at": updated.expires_at})
        return updated

    async def _exchange(self, refresh_token: str) -> TokenGrant:
        try:
            status, body = await self._http.post_form(
                self._token_url,
                {"grant_type": "refresh_token", "refresh_token": refresh_token},
                auth=self._auth,
            )
        except ProviderError as e:
            raise TokenRefreshError(f"Token endpoint unreachable: {e}") from e

        if not 200 <= status < 300:
            error_code = body.get("error") if isinstance(body, dict) else None
            description = body.get("error_description") if isinstance(body, dict) else None
            raise TokenRefreshError(
                f"Token endpoint returned HTTP {status}: {description or error_code or 'no detail'}",
                status_code=status,
                error_code=error_code,
                error_description=description,
            )

        try:
            return TokenGrant.model_validate(body)
        except PydanticValidationError as e:
            raise TokenRefreshError(
                "Token endpoint returned a malformed body", status_code=status
            ) from e

    async def invalidate(self) -> None:
        """Poison the credential and force sign-out (idempotent)."""
        if self._credential is not None and not self._credential.has_error:
            self._credential = self._credential.model_copy(
                update={"error": REFRESH_ACCESS_TOKEN_ERROR}
            )
        await self._fire_sign_out()

    async def sign_out(self) -> None:
        """End the session: revoke the access token and drop the credential."""
        cred = self._credential
        if cred is not None and cred.access_token:
            await self._revoke(cred.access_token)
        self._credential = None
        await self._fire_sign_out()

    async def _revoke(self, access_token: str) -> None:
        try:
            status, _ = await self._http.post_form(
                self._revoke_url, {"token": access_token}, auth=self._auth
            )
        except ProviderError as e:
            logger.warning(f"Error revoking access token: {e}")
            return
        if not 200 <= status < 300:
            logger.warning(f"Token revocation returned HTTP {status}")

    async def _fire_sign_out(self) -> None:
        if self._signed_out:
            return
        self._signed_out = True
        if self._on_sign_out is None:
            return
        result = self._on_sign_out()
        if inspect.isawaitable(result):
            await result

    async def close(self) -> None:
        """Close the HTTP client if this store created it."""
        if self._owns_http:
            await self._http.close()
