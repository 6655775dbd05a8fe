"""Session-aware query facade over the Yahoo connector.

Architecture:
    FantasyClient is what the view model talks to. Each query:
    - Checks the credential store first; a poisoned or missing session
      returns a SessionExpiredError state without any network access
    - Delegates to the connector (single page or comprehensive fetch)
    - Stores the data under the query's cache key (last writer wins)
    - Returns a QueryResult instead of raising

Design Decisions:
    - Errors are values at this layer: credential expiry has to reach the
      presentation layer as a typed state, and the other failures follow the
      same path so the view model has one shape to handle
    - The cache is pass-through (no staleness or eviction policy): every
      query goes upstream, and the cache only remembers the latest data for
      readers that need it synchronously

See Also:
    - YahooRESTConnector: Batch engine and comprehensive fetch
    - CredentialStore: Session lifecycle
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..auth import CredentialStore, SignOutCallback
from ..config import Settings
from ..connectors.yahoo import YahooRESTConnector
from ..core.constants import DEFAULT_MAX_RECORDS
from ..core.exceptions import AuthError, DataError, SessionExpiredError
from ..models import Credential, PlayerRecord, ResourceSelector, UserProfile
from ..runtime.chunking import BatchExecutor

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of a query: data, or the error that prevented it."""

    data: T | None = None
    error: DataError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def session_expired(self) -> bool:
        return isinstance(self.error, SessionExpiredError)


class FantasyClient:
    """Query facade for players and profile data.

    Example:
        >>> store = CredentialStore(credential, client_id=cid, client_secret=secret)
        >>> async with FantasyClient(store) as client:
        ...     result = await client.players_comprehensive(ResourceSelector())
        ...     if result.ok:
        ...         print(len(result.data))
    """

    def __init__(
        self,
        credentials: CredentialStore,
        *,
        connector: YahooRESTConnector | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Credential store for the session
            connector: Connector instance (created over ``credentials`` if omitted)
        """
        self._credentials = credentials
        self._owns_connector = connector is None
        self._connector = connector or YahooRESTConnector(credentials)
        self._cache: dict[Hashable, Any] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        credential: Credential,
        *,
        on_sign_out: SignOutCallback | None = None,
    ) -> FantasyClient:
        """Wire a store, connector and executor from Settings."""
        store = CredentialStore(
            credential,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            on_sign_out=on_sign_out,
        )
        connector = YahooRESTConnector(
            store,
            timeout=settings.http_timeout,
            executor=BatchExecutor(settings.batch_policy()),
        )
        client = cls(store, connector=connector)
        client._owns_connector = True
        return client

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    @property
    def connector(self) -> YahooRESTConnector:
        return self._connector

    def cached(self, key: Hashable) -> Any:
        """Latest data stored under a cache key (None if never fetched)."""
        return self._cache.get(key)

    @staticmethod
    def page_key(selector: ResourceSelector) -> tuple[Hashable, ...]:
        return ("players", selector)

    @staticmethod
    def comprehensive_key(selector: ResourceSelector, max_records: int) -> tuple[Hashable, ...]:
        # Paging fields are ignored: a comprehensive run always starts at 0
        return (
            "players-comprehensive",
            selector.player_type,
            selector.season,
            selector.stat_type,
            max_records,
        )

    async def players_page(self, selector: ResourceSelector) -> QueryResult[list[PlayerRecord]]:
        """One page of players."""
        return await self._query(self.page_key(selector), lambda: self._connector.fetch_batch(selector))

    async def players_comprehensive(
        self,
        selector: ResourceSelector,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> QueryResult[list[PlayerRecord]]:
        """Best-effort complete dataset for a selector.

        Transport failures shorten the dataset rather than producing an error.
        """
        return await self._query(
            self.comprehensive_key(selector, max_records),
            lambda: self._connector.fetch_all(selector, max_records),
        )

    async def user_profile(self) -> QueryResult[UserProfile]:
        """Signed-in user's profile."""
        return await self._query(("user-profile",), self._connector.get_user_profile)

    async def _query(self, key: Hashable, run: Callable[[], Awaitable[T]]) -> QueryResult[T]:
        if self._credentials.credential is None or self._credentials.has_error:
            return QueryResult(error=SessionExpiredError())

        try:
            data = await run()
        except AuthError as e:
            logger.warning(f"Query {key!r} stopped by credential error: {e}")
            error = e if isinstance(e, SessionExpiredError) else SessionExpiredError()
            return QueryResult(error=error)
        except DataError as e:
            logger.warning(f"Query {key!r} failed: {e}")
            return QueryResult(error=e)

        self._cache[key] = data
        return QueryResult(data=data)

    async def close(self) -> None:
        """Close the connector (if owned) and the credential store."""
        if self._owns_connector:
            await self._connector.close()
        await self._credentials.close()

    async def __aenter__(self) -> FantasyClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
