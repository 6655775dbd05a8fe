"""Yahoo REST connector."""

from .provider import CredentialSource, GameKeyCache, YahooRESTConnector, resolve_season

__all__ = ["CredentialSource", "GameKeyCache", "YahooRESTConnector", "resolve_season"]
