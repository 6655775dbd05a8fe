"""Runtime settings loaded from the environment.

Only the OAuth client credentials are required; everything else falls back
to the library defaults in ``core/constants.py``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .core.constants import (
    DEFAULT_BACKOFF_BASE_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    PAGE_SIZE,
)
from .core.exceptions import ConfigurationError
from .runtime.chunking import BatchPolicy

# Environment variable -> Settings field
ENV_FIELDS: dict[str, str] = {
    "YAHOO_CLIENT_ID": "client_id",
    "YAHOO_CLIENT_SECRET": "client_secret",
    "DUGOUT_HTTP_TIMEOUT": "http_timeout",
    "DUGOUT_BATCH_SIZE": "batch_size",
    "DUGOUT_MAX_ATTEMPTS": "max_attempts",
    "DUGOUT_BACKOFF_BASE": "backoff_base",
}


class Settings(BaseModel):
    """Library settings."""

    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1)
    http_timeout: float = Field(default=30.0, gt=0)
    batch_size: int = Field(default=PAGE_SIZE, gt=0, le=PAGE_SIZE)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, gt=0)
    backoff_base: float = Field(default=DEFAULT_BACKOFF_BASE_SECONDS, ge=0)

    model_config = ConfigDict(frozen=True)

    def batch_policy(self) -> BatchPolicy:
        """Batching policy for the comprehensive fetch."""
        return BatchPolicy(
            batch_size=self.batch_size,
            max_attempts=self.max_attempts,
            backoff_base=self.backoff_base,
        )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Raises:
        ConfigurationError: One or more variables are missing or invalid;
            ``fields`` maps each variable name to the problem
    """
    env = os.environ if environ is None else environ
    values = {field: env[name] for name, field in ENV_FIELDS.items() if env.get(name)}

    try:
        return Settings.model_validate(values)
    except PydanticValidationError as e:
        field_to_env = {field: name for name, field in ENV_FIELDS.items()}
        problems: dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            name = field_to_env.get(field, field)
            problems[name] = "missing" if error["type"] == "missing" else error["msg"]
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(sorted(problems))}", fields=problems
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings from ``os.environ``, loaded once per process."""
    return load_settings()
