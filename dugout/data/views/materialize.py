"""Result materialization: dataset -> ranked, filtered, revealed slice.

``materialize`` is pure. Original ranks are assigned from the unfiltered
dataset on every pass, so a record keeps the same original rank however the
filter and search are toggled; display ranks are recomputed for the slice.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.enums import PlayerFilter
from ..core.positions import matches_filter
from ..models import PlayerRecord, RankedPlayerRecord


@dataclass(frozen=True)
class MaterializedView:
    """Visible slice plus the size of the full match set."""

    visible: list[RankedPlayerRecord] = field(default_factory=list)
    total_matching: int = 0

    @property
    def has_more(self) -> bool:
        """Whether revealing more would show more records."""
        return len(self.visible) < self.total_matching


def matches_search(record: PlayerRecord, search_term: str) -> bool:
    """Case-insensitive substring match on full, first or last name.

    A blank term matches everything.
    """
    if not search_term.strip():
        return True
    needle = search_term.lower()
    name = record.name
    return needle in name.full.lower() or needle in name.first.lower() or needle in name.last.lower()


def materialize(
    dataset: Sequence[PlayerRecord] | None,
    active_filter: PlayerFilter | str,
    search_term: str,
    revealed_count: int,
) -> MaterializedView:
    """Derive the visible slice of a dataset.

    Args:
        dataset: Records in upstream rank order (None while nothing is loaded)
        active_filter: Position filter
        search_term: Free-text name search
        revealed_count: How many matching records are revealed

    Returns:
        MaterializedView whose ``total_matching`` ignores ``revealed_count``
    """
    if not dataset:
        return MaterializedView()

    matching = [
        (original_rank, record)
        for original_rank, record in enumerate(dataset, start=1)
        if matches_filter(record.positions, active_filter)
        and matches_search(record, search_term)
    ]

    visible = [
        RankedPlayerRecord.from_record(record, original_rank=original_rank, display_rank=index)
        for index, (original_rank, record) in enumerate(
            matching[: max(revealed_count, 0)], start=1
        )
    ]
    return MaterializedView(visible=visible, total_matching=len(matching))
