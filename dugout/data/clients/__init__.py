"""High-level clients."""

from .fantasy_client import FantasyClient, QueryResult

__all__ = ["FantasyClient", "QueryResult"]
