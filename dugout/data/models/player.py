"""Player record models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.positions import parse_positions

StatValueType = str | int | float


class PlayerName(BaseModel):
    """Player name parts as upstream reports them."""

    full: str = ""
    first: str = ""
    last: str = ""

    model_config = ConfigDict(frozen=True)


class StatValue(BaseModel):
    """Single stat entry. ``value`` is ``"-"`` when upstream has no data."""

    stat_id: int
    value: StatValueType

    model_config = ConfigDict(frozen=True)


class PlayerRecord(BaseModel):
    """Canonical player record produced by the wire mapping.

    ``key`` is assumed unique but duplicates from upstream pass through.
    """

    key: str = ""
    name: PlayerName = Field(default_factory=PlayerName)
    team: str = ""
    positions: str = ""
    stats: tuple[StatValue, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def by_stat_id(self) -> dict[int, StatValueType]:
        """Stat values keyed by stat id (last entry wins on repeats)."""
        return {stat.stat_id: stat.value for stat in self.stats}

    @property
    def position_list(self) -> list[str]:
        """Parsed position codes."""
        return parse_positions(self.positions)

    def stat(self, stat_id: int, default: Any = None) -> Any:
        """Look up one stat value."""
        return self.by_stat_id.get(stat_id, default)


class RankedPlayerRecord(PlayerRecord):
    """Player record with its fixed upstream rank and its rank in view."""

    original_rank: int = Field(..., ge=1)
    display_rank: int = Field(..., ge=1)

    @classmethod
    def from_record(
        cls, record: PlayerRecord, *, original_rank: int, display_rank: int
    ) -> RankedPlayerRecord:
        """Attach ranks to a plain record."""
        fields = {name: getattr(record, name) for name in PlayerRecord.model_fields}
        return cls(**fields, original_rank=original_rank, display_rank=display_rank)

    def to_record(self) -> PlayerRecord:
        """Drop the presentation ranks."""
        return PlayerRecord(**{name: getattr(self, name) for name in PlayerRecord.model_fields})
