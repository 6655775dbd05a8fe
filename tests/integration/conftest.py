"""Shared fixtures for integration tests."""

import os
import time

import pytest

from dugout.data.models import Credential

# Skip all integration tests unless RUN_DUGOUT_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_DUGOUT_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_DUGOUT_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def live_credential() -> Credential:
    """Credential from YAHOO_ACCESS_TOKEN / YAHOO_REFRESH_TOKEN.

    The access token is treated as already expired so the first query
    exercises the refresh grant.
    """
    access = os.environ.get("YAHOO_ACCESS_TOKEN")
    if not access:
        pytest.skip("YAHOO_ACCESS_TOKEN not set")
    return Credential(
        access_token=access,
        refresh_token=os.environ.get("YAHOO_REFRESH_TOKEN"),
        expires_at=int(time.time()) - 1,
    )
