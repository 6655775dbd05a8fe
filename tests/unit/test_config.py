"""Unit tests for environment settings."""

import pytest

from dugout.data.config import Settings, load_settings
from dugout.data.core import ConfigurationError
from dugout.data.runtime.chunking import BatchPolicy

BASE_ENV = {"YAHOO_CLIENT_ID": "client", "YAHOO_CLIENT_SECRET": "secret"}


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(BASE_ENV)
        assert settings.client_id == "client"
        assert settings.http_timeout == 30.0
        assert settings.batch_size == 25
        assert settings.max_attempts == 3

    def test_overrides_are_coerced(self):
        settings = load_settings(
            {**BASE_ENV, "DUGOUT_BATCH_SIZE": "10", "DUGOUT_BACKOFF_BASE": "0.5"}
        )
        assert settings.batch_size == 10
        assert settings.backoff_base == 0.5

    def test_missing_credentials_named(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({})

        assert exc_info.value.fields == {
            "YAHOO_CLIENT_ID": "missing",
            "YAHOO_CLIENT_SECRET": "missing",
        }
        assert "YAHOO_CLIENT_ID" in str(exc_info.value)

    def test_empty_value_treated_as_missing(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({**BASE_ENV, "YAHOO_CLIENT_SECRET": ""})
        assert exc_info.value.fields == {"YAHOO_CLIENT_SECRET": "missing"}

    @pytest.mark.parametrize(
        "name,value",
        [
            ("DUGOUT_BATCH_SIZE", "many"),
            ("DUGOUT_BATCH_SIZE", "50"),
            ("DUGOUT_HTTP_TIMEOUT", "0"),
        ],
    )
    def test_invalid_values(self, name, value):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({**BASE_ENV, name: value})
        assert list(exc_info.value.fields) == [name]
        assert exc_info.value.fields[name] != "missing"


def test_batch_policy():
    settings = Settings(client_id="c", client_secret="s", max_attempts=4, backoff_base=0.0)
    assert settings.batch_policy() == BatchPolicy(batch_size=25, max_attempts=4, backoff_base=0.0)
