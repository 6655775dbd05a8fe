"""Resource selector for the players collection."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..core.constants import PAGE_SIZE
from ..core.enums import PlayerFilter, StatType
from ..core.positions import upload_position_param


@dataclass(frozen=True)
class ResourceSelector:
    """Which slice of the players collection to request.

    Attributes:
        player_type: Player type (filter) the request is for
        page_start: Zero-based offset into the upstream ranking
        page_count: Number of records to request
        season: Season year (None means the current season)
        stat_type: Stat window to request
    """

    player_type: PlayerFilter = PlayerFilter.ALL_BATTERS
    page_start: int = 0
    page_count: int = PAGE_SIZE
    season: int | None = None
    stat_type: StatType = StatType.SEASON

    def __post_init__(self) -> None:
        """Validate the paging window; upstream serves at most PAGE_SIZE per call."""
        if self.page_start < 0:
            raise ValueError("page_start cannot be negative")
        if not 0 < self.page_count <= PAGE_SIZE:
            raise ValueError(f"page_count must be between 1 and {PAGE_SIZE}")

    @property
    def upload_position_param(self) -> str:
        """``P`` for pitching player types, ``B`` otherwise."""
        return upload_position_param(self.player_type)

    def page(self, start: int, count: int) -> ResourceSelector:
        """Same selector for a different paging window."""
        return replace(self, page_start=start, page_count=count)
