"""Presentation-agnostic view layer: materialization, reveal, view model."""

from .columns import ColumnDef, column_set_for, columns_for
from .materialize import MaterializedView, matches_search, materialize
from .players_manager import PlayersManager, PlayersView
from .reveal import (
    ProgressiveRevealController,
    RevealState,
    ScrollMetrics,
    ScrollSource,
    ScrollThrottle,
    next_revealed_count,
)

__all__ = [
    "ColumnDef",
    "MaterializedView",
    "PlayersManager",
    "PlayersView",
    "ProgressiveRevealController",
    "RevealState",
    "ScrollMetrics",
    "ScrollSource",
    "ScrollThrottle",
    "column_set_for",
    "columns_for",
    "matches_search",
    "materialize",
    "next_revealed_count",
]
