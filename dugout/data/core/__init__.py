"""Core components."""

from .constants import (
    BATTING_STAT_LABELS,
    DEFAULT_MAX_RECORDS,
    DEFAULT_SCROLL_THRESHOLD,
    FILTER_LABELS,
    FIRST_SUPPORTED_SEASON,
    PAGE_SIZE,
    PITCHING_STAT_LABELS,
    SLOW_NETWORK_MAX_RECORDS,
    BattingStatIds,
    PitchingStatIds,
    max_records_for_network,
)
from .enums import (
    ColumnSet,
    NetworkQuality,
    PlayerFilter,
    PositionGroup,
    SeasonChoice,
    StatType,
    TimePeriod,
)
from .exceptions import (
    AuthError,
    ConfigurationError,
    DataError,
    GameNotFoundError,
    MalformedResponseError,
    ProviderError,
    RateLimitError,
    SessionExpiredError,
    TokenRefreshError,
    ValidationError,
)
from .positions import (
    api_player_type,
    is_batter,
    is_pitcher,
    matches_filter,
    parse_positions,
    primary_position,
    upload_position_param,
)

__all__ = [
    # Enums
    "ColumnSet",
    "NetworkQuality",
    "PlayerFilter",
    "PositionGroup",
    "SeasonChoice",
    "StatType",
    "TimePeriod",
    # Exceptions
    "AuthError",
    "ConfigurationError",
    "DataError",
    "GameNotFoundError",
    "MalformedResponseError",
    "ProviderError",
    "RateLimitError",
    "SessionExpiredError",
    "TokenRefreshError",
    "ValidationError",
    # Constants
    "BATTING_STAT_LABELS",
    "BattingStatIds",
    "DEFAULT_MAX_RECORDS",
    "DEFAULT_SCROLL_THRESHOLD",
    "FILTER_LABELS",
    "FIRST_SUPPORTED_SEASON",
    "PAGE_SIZE",
    "PITCHING_STAT_LABELS",
    "PitchingStatIds",
    "SLOW_NETWORK_MAX_RECORDS",
    "max_records_for_network",
    # Positions
    "api_player_type",
    "is_batter",
    "is_pitcher",
    "matches_filter",
    "parse_positions",
    "primary_position",
    "upload_position_param",
]
