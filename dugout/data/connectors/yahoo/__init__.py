"""Yahoo Fantasy Sports connector implementation."""

from .rest.provider import CredentialSource, GameKeyCache, YahooRESTConnector, resolve_season

__all__ = [
    "CredentialSource",
    "GameKeyCache",
    "YahooRESTConnector",
    "resolve_season",
]
