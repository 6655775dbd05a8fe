"""Column definitions for the players table.

The presentation layer renders whatever ``columns_for`` returns, in order.
Stat columns name the upstream stat ids they display; ``H/AB`` is the one
composite column.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import BattingStatIds, PitchingStatIds
from ..core.enums import ColumnSet, PlayerFilter
from ..models import RankedPlayerRecord


@dataclass(frozen=True)
class ColumnDef:
    """One table column.

    Attributes:
        id: Stable column identifier
        title: Header text
        stat_ids: Upstream stat ids shown in the cell (empty for info columns)
    """

    id: str
    title: str
    stat_ids: tuple[int, ...] = ()

    def cell(self, player: RankedPlayerRecord) -> str:
        """Cell text for a player; missing stats render as ``-``."""
        if self.stat_ids:
            return "/".join(str(player.stat(stat_id, "-")) for stat_id in self.stat_ids)
        if self.id == "rank":
            return str(player.display_rank)
        if self.id == "name":
            return player.name.full
        if self.id == "team":
            return player.team
        if self.id == "position":
            return player.positions
        return ""


COMMON_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef("rank", "Rank"),
    ColumnDef("name", "Name"),
    ColumnDef("team", "Team"),
    ColumnDef("position", "Position"),
)

BATTING_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef("batting_avg", "H/AB", (BattingStatIds.HITS, BattingStatIds.AT_BATS)),
    ColumnDef("runs", "R", (BattingStatIds.RUNS,)),
    ColumnDef("singles", "1B", (BattingStatIds.SINGLES,)),
    ColumnDef("doubles", "2B", (BattingStatIds.DOUBLES,)),
    ColumnDef("triples", "3B", (BattingStatIds.TRIPLES,)),
    ColumnDef("home_runs", "HR", (BattingStatIds.HOME_RUNS,)),
    ColumnDef("rbi", "RBI", (BattingStatIds.RBI,)),
    ColumnDef("stolen_bases", "SB", (BattingStatIds.STOLEN_BASES,)),
    ColumnDef("walks", "BB", (BattingStatIds.WALKS,)),
    ColumnDef("hit_by_pitch", "HBP", (BattingStatIds.HIT_BY_PITCH,)),
)

PITCHING_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef("innings_pitched", "IP", (PitchingStatIds.INNINGS_PITCHED,)),
    ColumnDef("whip", "WHIP", (PitchingStatIds.WHIP,)),
    ColumnDef("era", "ERA", (PitchingStatIds.ERA,)),
    ColumnDef("wins", "W", (PitchingStatIds.WINS,)),
    ColumnDef("saves", "SV", (PitchingStatIds.SAVES,)),
    ColumnDef("outs", "OUT", (PitchingStatIds.OUTS,)),
    ColumnDef("hits_allowed", "H", (PitchingStatIds.HITS_ALLOWED,)),
    ColumnDef("earned_runs", "ER", (PitchingStatIds.EARNED_RUNS,)),
    ColumnDef("walks_allowed", "BB", (PitchingStatIds.WALKS_ALLOWED,)),
    ColumnDef("hit_by_pitch_allowed", "HBP", (PitchingStatIds.HIT_BY_PITCH_ALLOWED,)),
    ColumnDef("strikeouts", "K", (PitchingStatIds.STRIKEOUTS,)),
    ColumnDef("blown_saves", "BS", (PitchingStatIds.BLOWN_SAVES,)),
)


def column_set_for(player_filter: PlayerFilter | str) -> ColumnSet:
    """Pitching columns for pitcher filters, batting columns otherwise."""
    resolved = PlayerFilter.from_str(player_filter)
    if resolved is not None and resolved.is_pitching:
        return ColumnSet.PITCHING
    return ColumnSet.BATTING


def columns_for(column_set: ColumnSet) -> tuple[ColumnDef, ...]:
    """Ordered columns for a column set."""
    if column_set == ColumnSet.PITCHING:
        return COMMON_COLUMNS + PITCHING_COLUMNS
    return COMMON_COLUMNS + BATTING_COLUMNS
