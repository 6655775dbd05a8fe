"""Custom exception hierarchy."""

from __future__ import annotations


class DataError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(DataError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, fields: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or {}


class ProviderError(DataError):
    """Error from external data provider."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ProviderError):
    """Provider rate limit exceeded."""

    def __init__(self, message: str, retry_after: int = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class GameNotFoundError(ProviderError):
    """Upstream has no game for the requested season."""

    def __init__(self, season: int | str) -> None:
        super().__init__(f"No MLB game found for season {season}")
        self.season = season


class ValidationError(DataError):
    """Data validation failure."""

    pass


class MalformedResponseError(ValidationError):
    """Upstream envelope does not have the expected shape.

    Individual malformed records are dropped by the adapters; this is raised
    only when the response as a whole cannot be interpreted.
    """

    def __init__(self, message: str, endpoint_id: str | None = None) -> None:
        super().__init__(message)
        self.endpoint_id = endpoint_id


class AuthError(DataError):
    """Credential problem."""

    pass


class TokenRefreshError(AuthError):
    """Refresh-grant exchange failed.

    Carries the OAuth error code and description when the token endpoint
    returned them.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        error_description: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_description = error_description


class SessionExpiredError(AuthError):
    """Credential is poisoned; the user must sign in again."""

    def __init__(self, message: str = "Session expired") -> None:
        super().__init__(message)
