"""Unit tests for the PlayersManager view model."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from dugout.data.clients import FantasyClient, QueryResult
from dugout.data.core import (
    ColumnSet,
    PlayerFilter,
    SeasonChoice,
    SessionExpiredError,
    StatType,
    TimePeriod,
)
from dugout.data.preferences import PLAYER_FILTER_KEY, InMemoryStorage, Preferences
from dugout.data.views import PlayersManager, ScrollMetrics
from tests.helpers import make_record, make_records

TODAY = date(2025, 6, 1)
NEAR_BOTTOM = ScrollMetrics(scroll_top=1500, scroll_height=2500, viewport_height=600)


def batters_and_pitchers():
    batters = [make_record(f"b{i}", f"Batter {i}", "OF" if i % 2 else "1B") for i in range(60)]
    pitchers = make_records(30, positions="SP", prefix="sp")
    return batters, pitchers


@pytest.fixture
def client():
    batters, pitchers = batters_and_pitchers()
    client = MagicMock(spec=FantasyClient)

    async def players_comprehensive(selector, max_records):
        data = pitchers if selector.player_type == PlayerFilter.ALL_PITCHERS else batters
        return QueryResult(data=data)

    client.players_comprehensive = AsyncMock(side_effect=players_comprehensive)
    client.cached = MagicMock(return_value=None)
    return client


def make_manager(client, storage=None) -> PlayersManager:
    return PlayersManager(
        client, preferences=Preferences(storage or InMemoryStorage()), today=lambda: TODAY
    )


class TestInitialState:
    def test_defaults_before_loading(self, client):
        manager = make_manager(client)
        view = manager.view

        assert view.filtered_players == []
        assert view.active_filter == PlayerFilter.ALL_BATTERS
        assert view.column_set == ColumnSet.BATTING
        assert not view.has_more
        assert manager.needs_refresh

    def test_stored_filter_restored(self, client):
        manager = make_manager(client, InMemoryStorage({PLAYER_FILTER_KEY: "RP"}))
        assert manager.active_filter == PlayerFilter.RELIEF_PITCHER
        assert manager.selector.player_type == PlayerFilter.ALL_PITCHERS

    def test_invalid_stored_filter_falls_back(self, client):
        manager = make_manager(client, InMemoryStorage({PLAYER_FILTER_KEY: "DH"}))
        assert manager.active_filter == PlayerFilter.ALL_BATTERS


class TestLoading:
    @pytest.mark.asyncio
    async def test_refresh_reveals_first_page(self, client):
        manager = make_manager(client)

        view = await manager.refresh()

        assert len(view.filtered_players) == 25
        assert view.total_filtered_count == 25
        assert view.total_matching_players == 60
        assert view.has_more
        assert not view.is_loading
        selector, max_records = client.players_comprehensive.await_args.args
        assert selector.player_type == PlayerFilter.ALL_BATTERS
        assert selector.season == 2025
        assert max_records == 2000

    @pytest.mark.asyncio
    async def test_load_more_until_exhausted(self, client):
        manager = make_manager(client)
        await manager.refresh()

        manager.load_more_players()
        assert manager.revealed_count == 50
        manager.load_more_players()
        manager.load_more_players()

        view = manager.view
        assert len(view.filtered_players) == 60
        assert not view.has_more
        assert view.filtered_players[-1].display_rank == 60

    @pytest.mark.asyncio
    async def test_ensure_loaded_skips_when_current(self, client):
        manager = make_manager(client)
        await manager.ensure_loaded()
        await manager.ensure_loaded()
        client.players_comprehensive.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_session_expired_is_exposed(self, client):
        client.players_comprehensive.side_effect = None
        client.players_comprehensive.return_value = QueryResult(error=SessionExpiredError())
        manager = make_manager(client)

        view = await manager.refresh()

        assert str(view.error) == "Session expired"
        assert view.filtered_players == []

    @pytest.mark.asyncio
    async def test_stale_result_is_ignored(self, client):
        batters, _ = batters_and_pitchers()
        manager = make_manager(client)

        async def slow_batters(selector, max_records):
            # The user switches to pitchers while the batters fetch is in flight
            manager.on_filter_change(PlayerFilter.ALL_PITCHERS)
            return QueryResult(data=batters)

        client.players_comprehensive.side_effect = slow_batters
        view = await manager.refresh()

        assert view.filtered_players == []
        assert manager.needs_refresh
        assert view.active_filter == PlayerFilter.ALL_PITCHERS


class TestInteraction:
    @pytest.mark.asyncio
    async def test_filter_change_is_client_side_within_group(self, client):
        storage = InMemoryStorage()
        manager = make_manager(client, storage)
        await manager.refresh()
        manager.on_search_change("Batter 1")
        manager.load_more_players()

        manager.on_filter_change("OF")

        view = manager.view
        assert view.search_term == ""
        assert manager.revealed_count == 25
        assert not manager.needs_refresh
        assert all(p.positions == "OF" for p in view.filtered_players)
        assert view.filtered_players[0].original_rank == 2
        assert view.total_matching_players == 30
        assert storage.get(PLAYER_FILTER_KEY) == "OF"

    @pytest.mark.asyncio
    async def test_pitcher_filter_needs_pitcher_dataset(self, client):
        manager = make_manager(client)
        await manager.refresh()

        manager.on_filter_change(PlayerFilter.STARTING_PITCHER)
        assert manager.needs_refresh
        view = await manager.ensure_loaded()

        assert view.column_set == ColumnSet.PITCHING
        assert view.total_matching_players == 30
        selector = client.players_comprehensive.await_args.args[0]
        assert selector.player_type == PlayerFilter.ALL_PITCHERS

    @pytest.mark.asyncio
    async def test_cached_dataset_adopted_on_switch(self, client):
        _, pitchers = batters_and_pitchers()
        client.cached.return_value = pitchers
        manager = make_manager(client)

        manager.on_filter_change(PlayerFilter.ALL_PITCHERS)

        assert not manager.needs_refresh
        assert manager.view.total_matching_players == 30

    def test_unknown_filter_ignored(self, client):
        manager = make_manager(client)
        manager.on_filter_change("DH")
        assert manager.active_filter == PlayerFilter.ALL_BATTERS

    @pytest.mark.asyncio
    async def test_search_resets_reveal(self, client):
        manager = make_manager(client)
        await manager.refresh()
        manager.load_more_players()

        manager.on_search_change("batter 5")

        view = manager.view
        assert manager.revealed_count == 25
        # "Batter 5" and "Batter 50".."Batter 59"
        assert view.total_matching_players == 11

    def test_season_and_period_drive_selector(self, client):
        manager = make_manager(client)

        manager.on_time_period_change(TimePeriod.LAST_WEEK)
        assert manager.selector.stat_type == StatType.LAST_WEEK

        manager.on_season_change(SeasonChoice.LAST)
        assert manager.selector.season == 2024
        assert manager.selector.stat_type == StatType.SEASON


class TestRevealWiring:
    @pytest.mark.asyncio
    async def test_burst_before_render_reveals_once(self, client):
        manager = make_manager(client)
        await manager.refresh()
        controller = manager.reveal_controller

        fired = [controller.on_scroll(NEAR_BOTTOM) for _ in range(3)]

        assert fired == [True, False, False]
        assert manager.revealed_count == 50
        assert controller.loading_more

    @pytest.mark.asyncio
    async def test_render_confirmation_rearms_until_exhausted(self, client):
        manager = make_manager(client)
        await manager.refresh()
        controller = manager.reveal_controller

        assert controller.on_scroll(NEAR_BOTTOM)
        manager.on_rendered()
        assert not controller.loading_more

        assert controller.on_scroll(NEAR_BOTTOM)
        assert manager.revealed_count == 60
        manager.on_rendered()

        assert not controller.loading_more
        assert not controller.on_scroll(NEAR_BOTTOM)

    @pytest.mark.asyncio
    async def test_stale_render_keeps_guard(self, client):
        manager = make_manager(client)
        await manager.refresh()
        controller = manager.reveal_controller

        controller.on_scroll(NEAR_BOTTOM)
        manager.on_rendered(data_length=25)

        assert controller.loading_more
        assert not controller.on_scroll(NEAR_BOTTOM)
        assert manager.revealed_count == 50

    @pytest.mark.asyncio
    async def test_no_reveal_when_everything_shown(self, client):
        manager = make_manager(client)
        await manager.refresh()
        manager.on_filter_change(PlayerFilter.FIRST_BASE)
        manager.on_search_change("Batter 4")

        assert not manager.reveal_controller.on_scroll(NEAR_BOTTOM)


class TestViewText:
    @pytest.mark.asyncio
    async def test_summary_and_progress(self, client):
        manager = make_manager(client)
        await manager.refresh()
        manager.on_filter_change(PlayerFilter.OUTFIELD)

        view = manager.view
        assert view.summary == "Showing 30 players matching Outfield filter"
        assert view.progress == "Showing 25 of 30 players - Scroll down to load more"

        manager.on_search_change("Batter 1")
        assert 'matching "Batter 1" in Outfield' in manager.view.summary
