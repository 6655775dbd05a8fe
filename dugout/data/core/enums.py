"""Core enumerations for standardized types across the library.

Architecture:
    This module defines the closed enumerations the pipeline dispatches on.
    Every branch that depends on a filter, season or period matches over one
    of these enums rather than over free-form strings, so adding a member is a
    visible, reviewable change.

Design Decisions:
    - String enums: Values are the exact strings persisted in preferences and
      sent upstream, so serialization is the identity
    - ``from_str`` helpers return None instead of raising, leaving the caller
      to pick a default

Key Types:
    - PlayerFilter: Position filters shown to the user (also the player type)
    - PositionGroup: Upstream position-group parameter (batters / pitchers)
    - SeasonChoice: Which season the user looks at
    - TimePeriod: Stat window within the current season
    - StatType: Upstream ``stats;type=`` value
    - ColumnSet: Which stat columns the presentation layer should render
    - NetworkQuality: Coarse client connection estimate
"""

from enum import Enum
from typing import Optional


class PlayerFilter(str, Enum):
    """Position filter (and player type) over the closed set the UI offers."""

    ALL_BATTERS = "ALL_BATTERS"
    ALL_PITCHERS = "ALL_PITCHERS"
    C = "C"
    FIRST_BASE = "1B"
    SECOND_BASE = "2B"
    SHORTSTOP = "SS"
    THIRD_BASE = "3B"
    OUTFIELD = "OF"
    UTIL = "Util"
    STARTING_PITCHER = "SP"
    RELIEF_PITCHER = "RP"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    @property
    def is_pitching(self) -> bool:
        """Whether this filter selects pitchers."""
        return self in (
            PlayerFilter.ALL_PITCHERS,
            PlayerFilter.STARTING_PITCHER,
            PlayerFilter.RELIEF_PITCHER,
        )

    @property
    def position_group(self) -> "PositionGroup":
        """Upstream position group implied by this player type."""
        return PositionGroup.PITCHERS if self.is_pitching else PositionGroup.BATTERS

    @classmethod
    def from_str(cls, value: object) -> Optional["PlayerFilter"]:
        """Get filter from its string value. Returns None if no match."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class PositionGroup(str, Enum):
    """Upstream ``position=`` parameter for the players collection."""

    BATTERS = "B"
    PITCHERS = "P"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class StatType(str, Enum):
    """Upstream stat window. ``season`` is also used for the prior season."""

    SEASON = "season"
    LAST_MONTH = "lastmonth"
    LAST_WEEK = "lastweek"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class SeasonChoice(str, Enum):
    """Season selection; the prior season uses a different game key."""

    CURRENT = "current"
    LAST = "last"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    def to_year(self, current_year: int) -> int:
        """Resolve to a concrete season year."""
        if self == SeasonChoice.LAST:
            return current_year - 1
        return current_year

    @classmethod
    def from_str(cls, value: object) -> Optional["SeasonChoice"]:
        """Get season choice from string value. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            return None


class TimePeriod(str, Enum):
    """Stat window within the current season."""

    FULL = "full"
    LAST_MONTH = "lastmonth"
    LAST_WEEK = "lastweek"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    @classmethod
    def from_str(cls, value: object) -> Optional["TimePeriod"]:
        """Get time period from string value. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            return None


class ColumnSet(str, Enum):
    """Stat columns hint for the presentation layer."""

    BATTING = "batting"
    PITCHING = "pitching"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class NetworkQuality(str, Enum):
    """Effective connection type as reported by the client."""

    SLOW_2G = "slow-2g"
    TWO_G = "2g"
    THREE_G = "3g"
    FOUR_G = "4g"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    @property
    def is_slow(self) -> bool:
        """Whether the connection should get the smaller fetch ceiling."""
        return self in (NetworkQuality.SLOW_2G, NetworkQuality.TWO_G, NetworkQuality.THREE_G)
