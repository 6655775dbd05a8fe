"""Position parsing and filter matching.

All functions here are pure and total: any string (including empty or
malformed comma-separated input) yields a result, never an exception.
"""

from __future__ import annotations

from .constants import OUTFIELD_POSITIONS, PITCHER_POSITIONS
from .enums import PlayerFilter, PositionGroup


def parse_positions(display_position: str | None) -> list[str]:
    """Split an upstream display position into individual codes.

    >>> parse_positions("1B,OF")
    ['1B', 'OF']
    >>> parse_positions("C,,1B")
    ['C', '1B']
    """
    if not display_position:
        return []
    return [pos.strip() for pos in display_position.split(",") if pos.strip()]


def is_pitcher(display_position: str | None) -> bool:
    """Whether any listed position is a pitching position."""
    return any(pos in PITCHER_POSITIONS for pos in parse_positions(display_position))


def is_batter(display_position: str | None) -> bool:
    """Whether no listed position is a pitching position."""
    return not is_pitcher(display_position)


def primary_position(display_position: str | None) -> str:
    """First listed position, or an empty string."""
    positions = parse_positions(display_position)
    return positions[0] if positions else ""


def matches_filter(display_position: str | None, player_filter: PlayerFilter | str) -> bool:
    """Check whether a player's positions satisfy a filter.

    Unknown filter values match nothing. An empty position string counts as
    "not a pitcher", so it matches only ALL_BATTERS and Util.
    """
    resolved = PlayerFilter.from_str(player_filter)
    if resolved is None:
        return False

    positions = parse_positions(display_position)
    pitches = any(pos in PITCHER_POSITIONS for pos in positions)

    if resolved in (PlayerFilter.ALL_BATTERS, PlayerFilter.UTIL):
        return not pitches
    if resolved == PlayerFilter.ALL_PITCHERS:
        return pitches
    if resolved == PlayerFilter.OUTFIELD:
        return any(pos in OUTFIELD_POSITIONS for pos in positions)
    if resolved in (PlayerFilter.STARTING_PITCHER, PlayerFilter.RELIEF_PITCHER):
        return resolved.value in positions or "P" in positions
    if resolved in (
        PlayerFilter.C,
        PlayerFilter.FIRST_BASE,
        PlayerFilter.SECOND_BASE,
        PlayerFilter.SHORTSTOP,
        PlayerFilter.THIRD_BASE,
    ):
        return resolved.value in positions
    return False


def upload_position_param(player_type: PlayerFilter | str) -> str:
    """Upstream position-group parameter for a player type.

    Total over every string: anything that is not a known pitching filter
    maps to the batters group.
    """
    resolved = PlayerFilter.from_str(player_type)
    if resolved is None:
        return PositionGroup.BATTERS.value
    return resolved.position_group.value


def api_player_type(player_filter: PlayerFilter | str) -> PlayerFilter:
    """Dataset a view filter is carved out of: all pitchers or all batters."""
    resolved = PlayerFilter.from_str(player_filter)
    if resolved is not None and resolved.is_pitching:
        return PlayerFilter.ALL_PITCHERS
    return PlayerFilter.ALL_BATTERS
