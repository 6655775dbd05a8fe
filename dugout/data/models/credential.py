"""OAuth credential models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

REFRESH_ACCESS_TOKEN_ERROR = "RefreshAccessTokenError"


class Credential(BaseModel):
    """Bearer credential owned by the authentication subsystem.

    A credential with ``error`` set must never be used to issue a fetch.
    """

    access_token: str = Field(..., min_length=1)
    refresh_token: str | None = None
    expires_at: int | None = None  # epoch seconds
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    def is_expired(self, now: float) -> bool:
        """Whether the access token has expired at ``now`` (epoch seconds).

        A credential without a known expiry is treated as expired so that a
        refresh is attempted when a refresh token exists.
        """
        if self.expires_at is None:
            return True
        return now >= self.expires_at

    @property
    def has_error(self) -> bool:
        """Whether the credential has been poisoned."""
        return self.error is not None


class TokenGrant(BaseModel):
    """Successful token endpoint response."""

    access_token: str = Field(..., min_length=1)
    expires_in: int = Field(..., ge=0)
    refresh_token: str | None = None
    token_type: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")
