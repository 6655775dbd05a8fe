"""Shared fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dugout.data.models import Credential


@pytest.fixture
def valid_credential() -> Credential:
    """Credential that expires far in the future (clock fixtures use t=1000)."""
    return Credential(access_token="access-1", refresh_token="refresh-1", expires_at=10_000)


@pytest.fixture
def expired_credential() -> Credential:
    return Credential(access_token="access-old", refresh_token="refresh-1", expires_at=500)


@pytest.fixture
def fake_credentials() -> AsyncMock:
    """Credential source returning fixed bearer headers."""
    source = AsyncMock()
    source.auth_headers = AsyncMock(
        return_value={"Authorization": "Bearer access-1", "Accept": "application/json"}
    )
    return source


@pytest.fixture
def no_sleep() -> AsyncMock:
    """Backoff sleep that returns immediately and records delays."""
    return AsyncMock(return_value=None)
