"""Players view model.

Architecture:
    PlayersManager owns the UI-facing state (filter, search, season, time
    period, reveal count) and the dataset for the current API selector. Every
    read of ``view`` re-materializes from that state, so the presentation
    layer only ever sees a consistent PlayersView snapshot.

    Fetching is coarse: pitcher filters share the ALL_PITCHERS dataset and
    every other filter shares ALL_BATTERS, so most filter changes are
    client-side only. ``needs_refresh`` tells the caller when the API
    selector moved and ``refresh`` must be awaited.

Design Decisions:
    - No cancellation: a fetch that completes after the selector changed is
      dropped by comparing selectors
    - Filter changes also clear the search term
    - A reveal holds the controller in LOADING_MORE until ``on_rendered``
      reports the larger view
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from ..clients import FantasyClient
from ..core.constants import DEFAULT_MAX_RECORDS, FILTER_LABELS, PAGE_SIZE
from ..core.enums import ColumnSet, PlayerFilter, SeasonChoice, TimePeriod
from ..core.exceptions import DataError
from ..core.positions import api_player_type
from ..models import PlayerRecord, RankedPlayerRecord, ResourceSelector
from ..preferences import Preferences, derive_stat_type
from .columns import ColumnDef, column_set_for, columns_for
from .materialize import materialize
from .reveal import ProgressiveRevealController, next_revealed_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayersView:
    """Snapshot handed to the presentation layer.

    Attributes:
        filtered_players: Revealed slice, ranked
        column_set: Which stat columns to render
        is_loading: A fetch for the current selector is in flight
        total_filtered_count: Number of records currently revealed
        total_matching_players: Number of records matching filter and search
        has_more: Whether another reveal would show more records
        active_filter: Current position filter
        search_term: Current search text
        error: Error from the last fetch (SessionExpiredError when signed out)
    """

    filtered_players: list[RankedPlayerRecord] = field(default_factory=list)
    column_set: ColumnSet = ColumnSet.BATTING
    is_loading: bool = False
    total_filtered_count: int = 0
    total_matching_players: int = 0
    has_more: bool = False
    active_filter: PlayerFilter = PlayerFilter.ALL_BATTERS
    search_term: str = ""
    error: DataError | None = None

    @property
    def columns(self) -> tuple[ColumnDef, ...]:
        return columns_for(self.column_set)

    @property
    def summary(self) -> str:
        """Header line, e.g. ``Showing 42 players matching "jo" in Outfield filter``."""
        if self.is_loading:
            return "Loading player dataset..."
        label = FILTER_LABELS.get(self.active_filter, str(self.active_filter))
        count = self.total_matching_players
        if self.search_term.strip():
            return f'Showing {count} players matching "{self.search_term}" in {label} filter'
        return f"Showing {count} players matching {label} filter"

    @property
    def progress(self) -> str:
        """Footer line, e.g. ``Showing 25 of 80 players - Scroll down to load more``."""
        tail = "Scroll down to load more" if self.has_more else "All players loaded"
        return f"Showing {self.total_filtered_count} of {self.total_matching_players} players - {tail}"


class PlayersManager:
    """View model for the players table."""

    def __init__(
        self,
        client: FantasyClient,
        *,
        preferences: Preferences | None = None,
        max_records: int = DEFAULT_MAX_RECORDS,
        page_size: int = PAGE_SIZE,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the view model.

        Args:
            client: Query facade
            preferences: Stored filter/season/period (in-memory if omitted)
            max_records: Comprehensive fetch ceiling (see ``max_records_for_network``)
            page_size: Reveal increment
            today: Date provider used to resolve the season choice
        """
        self._client = client
        self._preferences = preferences or Preferences()
        self._max_records = max_records
        self._page_size = page_size
        self._today = today

        self._active_filter = self._preferences.get_player_filter()
        self._season = self._preferences.get_season()
        self._time_period = self._preferences.get_time_period()
        self._search_term = ""
        self._revealed_count = page_size

        self._dataset: list[PlayerRecord] | None = None
        self._loaded_selector: ResourceSelector | None = None
        self._loading_selector: ResourceSelector | None = None
        self._error: DataError | None = None

        self._reveal = ProgressiveRevealController(self.load_more_players)

    # State accessors
    @property
    def active_filter(self) -> PlayerFilter:
        return self._active_filter

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def season(self) -> SeasonChoice:
        return self._season

    @property
    def time_period(self) -> TimePeriod:
        return self._time_period

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def reveal_controller(self) -> ProgressiveRevealController:
        """Controller to feed with scroll samples (wired to ``load_more_players``)."""
        return self._reveal

    @property
    def selector(self) -> ResourceSelector:
        """API selector implied by the current filter, season and period."""
        return ResourceSelector(
            player_type=api_player_type(self._active_filter),
            season=self._season.to_year(self._today().year),
            stat_type=derive_stat_type(self._season, self._time_period),
        )

    @property
    def needs_refresh(self) -> bool:
        """Whether the loaded dataset belongs to a different selector."""
        return self._loaded_selector != self.selector

    @property
    def view(self) -> PlayersView:
        materialized = materialize(
            self._dataset, self._active_filter, self._search_term, self._revealed_count
        )
        return PlayersView(
            filtered_players=materialized.visible,
            column_set=column_set_for(self._active_filter),
            is_loading=self._loading_selector is not None
            and self._loading_selector == self.selector,
            total_filtered_count=len(materialized.visible),
            total_matching_players=materialized.total_matching,
            has_more=materialized.has_more,
            active_filter=self._active_filter,
            search_term=self._search_term,
            error=self._error,
        )

    # Data
    async def refresh(self) -> PlayersView:
        """Fetch the dataset for the current selector.

        A result that arrives after the selector changed is ignored.
        """
        selector = self.selector
        self._loading_selector = selector
        result = await self._client.players_comprehensive(selector, self._max_records)

        if selector != self.selector:
            logger.debug(f"Ignoring stale players result for {selector}")
            return self.view

        self._loading_selector = None
        self._loaded_selector = selector
        self._error = result.error
        if result.ok:
            self._dataset = result.data
        elif result.session_expired:
            self._dataset = None
        self._reset_reveal()
        return self.view

    async def ensure_loaded(self) -> PlayersView:
        """Refresh only when the selector moved since the last load."""
        if self.needs_refresh:
            return await self.refresh()
        return self.view

    # Interaction
    def load_more_players(self) -> None:
        """Reveal the next page of matching records."""
        total = self.view.total_matching_players
        self._revealed_count = next_revealed_count(self._revealed_count, total, self._page_size)

    def on_rendered(self, data_length: int | None = None) -> None:
        """Confirm the presentation layer drew the current view.

        Releases the reveal controller once the rendered rows grew or nothing
        more can be revealed. Scroll samples taken before this call never
        trigger a second reveal.

        Args:
            data_length: Rows actually rendered (defaults to the current view)
        """
        view = self.view
        rendered = len(view.filtered_players) if data_length is None else data_length
        self._reveal.update(has_more=view.has_more, data_length=rendered)

    def on_filter_change(self, player_filter: PlayerFilter | str) -> None:
        """Switch the position filter; resets search and reveal."""
        resolved = PlayerFilter.from_str(player_filter)
        if resolved is None:
            logger.debug(f"Ignoring unknown filter {player_filter!r}")
            return
        self._active_filter = resolved
        self._search_term = ""
        self._revealed_count = self._page_size
        self._preferences.save_player_filter(resolved)
        self._adopt_cached()
        self._reset_reveal()

    def on_search_change(self, search_term: str) -> None:
        """Update the search text; resets reveal."""
        self._search_term = search_term
        self._revealed_count = self._page_size
        self._reset_reveal()

    def on_season_change(self, season: SeasonChoice | str) -> None:
        resolved = SeasonChoice.from_str(season)
        if resolved is None:
            return
        self._season = resolved
        self._revealed_count = self._page_size
        self._preferences.save_season(resolved)
        self._adopt_cached()
        self._reset_reveal()

    def on_time_period_change(self, period: TimePeriod | str) -> None:
        resolved = TimePeriod.from_str(period)
        if resolved is None:
            return
        self._time_period = resolved
        self._revealed_count = self._page_size
        self._preferences.save_time_period(resolved)
        self._adopt_cached()
        self._reset_reveal()

    def _adopt_cached(self) -> None:
        """Show the last dataset fetched for the new selector, if any."""
        if not self.needs_refresh:
            return
        key = FantasyClient.comprehensive_key(self.selector, self._max_records)
        cached = self._client.cached(key)
        self._dataset = cached
        self._loaded_selector = self.selector if cached is not None else None
        self._error = None

    def _reset_reveal(self) -> None:
        view = self.view
        self._reveal.reset(has_more=view.has_more, data_length=len(view.filtered_players))
