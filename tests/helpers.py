"""Yahoo-shaped payload builders and record factories for tests."""

from __future__ import annotations

from typing import Any

from dugout.data.models import PlayerName, PlayerRecord, StatValue


def yahoo_player(
    key: str,
    full: str,
    positions: str = "1B",
    *,
    team: str = "NYY",
    stats: dict[int, Any] | None = None,
) -> dict[str, Any]:
    """One entry of a Yahoo players collection."""
    first, _, last = full.partition(" ")
    metadata: list[Any] = [
        {"player_key": key},
        {"player_id": key.rsplit(".", 1)[-1]},
        {"name": {"full": full, "first": first, "last": last}},
        [],
        {"editorial_team_abbr": team},
        {"display_position": positions},
    ]
    stat_entries = [
        {"stat": {"stat_id": str(stat_id), "value": value}}
        for stat_id, value in (stats or {8: "10", 6: "40"}).items()
    ]
    return {
        "player": [
            metadata,
            {"player_stats": {"coverage_type": "season", "stats": stat_entries}},
        ]
    }


def yahoo_players_response(entries: list[dict[str, Any]], game_key: str = "458") -> dict[str, Any]:
    """Players collection envelope; an empty page renders ``players`` as []."""
    players: Any = {str(i): entry for i, entry in enumerate(entries)}
    if entries:
        players["count"] = len(entries)
    else:
        players = []
    return {
        "fantasy_content": {
            "game": [
                [{"game_key": game_key}, {"code": "mlb"}],
                {"players": players},
            ]
        }
    }


def yahoo_games_response(*game_keys: str, season: int = 2025) -> dict[str, Any]:
    games: dict[str, Any] = {
        str(i): {
            "game": [
                {
                    "game_key": key,
                    "game_id": key,
                    "name": "Baseball",
                    "code": "mlb",
                    "season": str(season),
                }
            ]
        }
        for i, key in enumerate(game_keys)
    }
    games["count"] = len(game_keys)
    return {"fantasy_content": {"games": games if game_keys else []}}


def make_record(key: str, full: str = "", positions: str = "1B") -> PlayerRecord:
    first, _, last = full.partition(" ")
    return PlayerRecord(
        key=key,
        name=PlayerName(full=full, first=first, last=last),
        team="NYY",
        positions=positions,
        stats=(StatValue(stat_id=8, value="10"),),
    )


def make_records(count: int, positions: str = "1B", prefix: str = "p") -> list[PlayerRecord]:
    return [make_record(f"{prefix}{i}", f"Player {i}", positions) for i in range(count)]
