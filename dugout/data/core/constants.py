"""Shared constants for paging, reveal and stat columns."""

from __future__ import annotations

from .enums import NetworkQuality, PlayerFilter

# Records per upstream batch and per reveal step
PAGE_SIZE = 25

# Distance from the bottom (px) at which the reveal controller fires
DEFAULT_SCROLL_THRESHOLD = 500

# Orchestrator retry policy
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_BASE_SECONDS = 1.0
DEFAULT_MAX_CONSECUTIVE_EMPTY = 2

# Comprehensive fetch ceilings per connection quality
SLOW_NETWORK_MAX_RECORDS = 500
DEFAULT_MAX_RECORDS = 2000

# Oldest season the upstream still serves
FIRST_SUPPORTED_SEASON = 2001

PITCHER_POSITIONS = frozenset({"P", "SP", "RP"})
OUTFIELD_POSITIONS = frozenset({"OF", "LF", "CF", "RF"})

# Display names for the position filters
FILTER_LABELS: dict[PlayerFilter, str] = {
    PlayerFilter.ALL_BATTERS: "All Batters",
    PlayerFilter.ALL_PITCHERS: "All Pitchers",
    PlayerFilter.C: "Catcher",
    PlayerFilter.FIRST_BASE: "First Base",
    PlayerFilter.SECOND_BASE: "Second Base",
    PlayerFilter.SHORTSTOP: "Shortstop",
    PlayerFilter.THIRD_BASE: "Third Base",
    PlayerFilter.OUTFIELD: "Outfield",
    PlayerFilter.UTIL: "Utility",
    PlayerFilter.STARTING_PITCHER: "Starting Pitcher",
    PlayerFilter.RELIEF_PITCHER: "Relief Pitcher",
}


class BattingStatIds:
    """Upstream stat ids for batting columns."""

    AT_BATS = 6
    RUNS = 7
    HITS = 8
    RBI = 9
    SINGLES = 10
    DOUBLES = 11
    TRIPLES = 12
    HOME_RUNS = 13
    STOLEN_BASES = 16
    WALKS = 18
    HIT_BY_PITCH = 20


class PitchingStatIds:
    """Upstream stat ids for pitching columns."""

    ERA = 26
    WHIP = 27
    WINS = 28
    SAVES = 32
    OUTS = 33
    HITS_ALLOWED = 34
    EARNED_RUNS = 37
    WALKS_ALLOWED = 39
    HIT_BY_PITCH_ALLOWED = 41
    STRIKEOUTS = 42
    INNINGS_PITCHED = 50
    BLOWN_SAVES = 84


BATTING_STAT_LABELS: dict[int, str] = {
    BattingStatIds.AT_BATS: "AB",
    BattingStatIds.RUNS: "R",
    BattingStatIds.HITS: "H",
    BattingStatIds.RBI: "RBI",
    BattingStatIds.SINGLES: "1B",
    BattingStatIds.DOUBLES: "2B",
    BattingStatIds.TRIPLES: "3B",
    BattingStatIds.HOME_RUNS: "HR",
    BattingStatIds.STOLEN_BASES: "SB",
    BattingStatIds.WALKS: "BB",
    BattingStatIds.HIT_BY_PITCH: "HBP",
}

PITCHING_STAT_LABELS: dict[int, str] = {
    PitchingStatIds.ERA: "ERA",
    PitchingStatIds.WHIP: "WHIP",
    PitchingStatIds.WINS: "W",
    PitchingStatIds.SAVES: "SV",
    PitchingStatIds.OUTS: "OUT",
    PitchingStatIds.HITS_ALLOWED: "H",
    PitchingStatIds.EARNED_RUNS: "ER",
    PitchingStatIds.WALKS_ALLOWED: "BB",
    PitchingStatIds.HIT_BY_PITCH_ALLOWED: "HBP",
    PitchingStatIds.STRIKEOUTS: "K",
    PitchingStatIds.INNINGS_PITCHED: "IP",
    PitchingStatIds.BLOWN_SAVES: "BSV",
}


def max_records_for_network(quality: NetworkQuality | str | None) -> int:
    """Pick the comprehensive fetch ceiling for a connection estimate.

    Unknown or missing estimates get the default ceiling.
    """
    if quality is None:
        return DEFAULT_MAX_RECORDS
    try:
        quality = NetworkQuality(quality)
    except ValueError:
        return DEFAULT_MAX_RECORDS
    return SLOW_NETWORK_MAX_RECORDS if quality.is_slow else DEFAULT_MAX_RECORDS
