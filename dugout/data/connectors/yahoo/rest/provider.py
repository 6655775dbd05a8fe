"""Yahoo Fantasy REST connector.

Architecture:
    This connector uses the endpoint registry to look up specs and adapters,
    then uses RestRunner to execute requests. Bearer headers are resolved
    from the credential source on every request, so a token refreshed
    mid-run is picked up by the next batch and a poisoned session stops the
    run before any network access.

    ``fetch_batch`` is the single-page engine: it propagates transport and
    envelope errors. ``fetch_all`` wraps it in the BatchExecutor, which turns
    repeated failures into a partial dataset.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, Protocol

from dugout.data.connectors.yahoo.config import FANTASY_BASE_URL
from dugout.data.core.constants import FIRST_SUPPORTED_SEASON
from dugout.data.core.exceptions import GameNotFoundError
from dugout.data.models import GameInfo, PlayerRecord, ResourceSelector, UserProfile
from dugout.data.runtime.chunking import BatchExecutor, BatchPlan, FetchResult
from dugout.data.runtime.rest import HTTPClient, RestRunner

from .endpoints import get_endpoint_adapter, get_endpoint_spec

logger = logging.getLogger(__name__)


class CredentialSource(Protocol):
    """Anything that can produce bearer headers (normally a CredentialStore)."""

    async def auth_headers(self) -> dict[str, str]: ...


class GameKeyCache:
    """Append-only season -> game key map owned by one connector.

    Entries are never evicted or overwritten; at most the current and the
    prior season are queried in one session.
    """

    def __init__(self) -> None:
        self._keys: dict[int, str] = {}

    def get(self, season: int) -> str | None:
        return self._keys.get(season)

    def add(self, season: int, game_key: str) -> str:
        """Store a key unless one is already cached; return the cached key."""
        return self._keys.setdefault(season, game_key)

    def __contains__(self, season: object) -> bool:
        return season in self._keys

    def __len__(self) -> int:
        return len(self._keys)


def resolve_season(season: int | str | None, today: date) -> int:
    """Validate a requested season year.

    Missing, non-numeric, too old or future seasons fall back to the
    current year.
    """
    current = today.year
    if season is None:
        return current
    try:
        year = int(season)
    except (TypeError, ValueError):
        return current
    if FIRST_SUPPORTED_SEASON <= year <= current:
        return year
    logger.debug(f"Season {season!r} out of range, using {current}")
    return current


class YahooRESTConnector:
    """Yahoo Fantasy REST connector for one authenticated session."""

    def __init__(
        self,
        credentials: CredentialSource,
        *,
        http: HTTPClient | None = None,
        base_url: str = FANTASY_BASE_URL,
        timeout: float = 30.0,
        game_keys: GameKeyCache | None = None,
        executor: BatchExecutor | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize Yahoo REST connector.

        Args:
            credentials: Source of bearer headers
            http: HTTP client (created with ``base_url``/``timeout`` if omitted)
            base_url: Fantasy API base URL
            timeout: Total timeout per request in seconds
            game_keys: Season -> game key cache (a fresh one per connector by default)
            executor: Batch executor for comprehensive fetches
            today: Date provider used for season defaults
        """
        self._credentials = credentials
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout)
        self._runner = RestRunner(self._http, headers=credentials.auth_headers)
        self._game_keys = game_keys if game_keys is not None else GameKeyCache()
        self._executor = executor or BatchExecutor()
        self._today = today

    @property
    def game_keys(self) -> GameKeyCache:
        return self._game_keys

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Fetch data from a Yahoo REST endpoint.

        Args:
            endpoint_id: Endpoint identifier (e.g., "players", "games")
            params: Request parameters

        Returns:
            Parsed response from the endpoint adapter

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(spec=spec, adapter=adapter_cls(), params=params)

    async def get_game_key(self, season: int | str | None = None) -> str:
        """Resolve (and cache) the game key for a season.

        Raises:
            GameNotFoundError: Upstream has no game for the season
        """
        year = resolve_season(season, self._today())
        cached = self._game_keys.get(year)
        if cached is not None:
            return cached

        games: list[GameInfo] = await self.fetch("games", {"season": year})
        if not games:
            raise GameNotFoundError(year)
        return self._game_keys.add(year, games[0].game_key)

    async def fetch_batch(self, selector: ResourceSelector) -> list[PlayerRecord]:
        """Fetch one page of players for a selector.

        Transport and envelope errors propagate; malformed records are
        dropped by the adapter.
        """
        game_key = await self.get_game_key(selector.season)
        params = {
            "game_key": game_key,
            "start": selector.page_start,
            "count": selector.page_count,
            "position": selector.upload_position_param,
            "stat_type": selector.stat_type,
        }
        return await self.fetch("players", params)

    async def run_fetch_all(self, selector: ResourceSelector, max_records: int) -> FetchResult:
        """Comprehensive fetch with the executor's full result metadata."""

        async def _fetch(plan: BatchPlan) -> list[PlayerRecord]:
            return await self.fetch_batch(selector.page(plan.start, plan.limit))

        return await self._executor.fetch_all(
            fetch_batch=_fetch,
            max_records=max_records,
            endpoint_id=f"players:{selector.player_type.value}",
        )

    async def fetch_all(self, selector: ResourceSelector, max_records: int) -> list[PlayerRecord]:
        """Best-effort complete dataset for a selector, in upstream rank order."""
        result = await self.run_fetch_all(selector, max_records)
        return result.data

    async def get_user_profile(self) -> UserProfile:
        """Signed-in user's profile."""
        return await self.fetch("users", {})

    async def close(self) -> None:
        """Close underlying resources."""
        await self._http.close()

    async def __aenter__(self) -> YahooRESTConnector:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
