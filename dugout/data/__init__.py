"""Dugout Data - Yahoo Fantasy MLB player data library."""

from .auth import CredentialStore
from .clients import FantasyClient, QueryResult
from .config import Settings, get_settings, load_settings
from .connectors.yahoo import GameKeyCache, YahooRESTConnector
from .core import (
    PAGE_SIZE,
    AuthError,
    ColumnSet,
    ConfigurationError,
    DataError,
    GameNotFoundError,
    MalformedResponseError,
    NetworkQuality,
    PlayerFilter,
    ProviderError,
    RateLimitError,
    SeasonChoice,
    SessionExpiredError,
    StatType,
    TimePeriod,
    TokenRefreshError,
    ValidationError,
    matches_filter,
    max_records_for_network,
    parse_positions,
)
from .models import (
    Credential,
    GameInfo,
    PlayerName,
    PlayerRecord,
    RankedPlayerRecord,
    ResourceSelector,
    StatValue,
    UserProfile,
)
from .preferences import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    Preferences,
    derive_stat_type,
)
from .runtime.chunking import BatchExecutor, BatchPolicy, FetchResult, StopReason
from .views import (
    MaterializedView,
    PlayersManager,
    PlayersView,
    ProgressiveRevealController,
    ScrollMetrics,
    ScrollThrottle,
    column_set_for,
    materialize,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "FantasyClient",
    "QueryResult",
    # Auth
    "CredentialStore",
    # Config
    "Settings",
    "get_settings",
    "load_settings",
    # Connectors
    "GameKeyCache",
    "YahooRESTConnector",
    # Batching
    "BatchExecutor",
    "BatchPolicy",
    "FetchResult",
    "StopReason",
    # Enums
    "ColumnSet",
    "NetworkQuality",
    "PlayerFilter",
    "SeasonChoice",
    "StatType",
    "TimePeriod",
    # Models
    "Credential",
    "GameInfo",
    "PlayerName",
    "PlayerRecord",
    "RankedPlayerRecord",
    "ResourceSelector",
    "StatValue",
    "UserProfile",
    # Preferences
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "Preferences",
    "derive_stat_type",
    # Views
    "MaterializedView",
    "PlayersManager",
    "PlayersView",
    "ProgressiveRevealController",
    "ScrollMetrics",
    "ScrollThrottle",
    "column_set_for",
    "materialize",
    # Helpers
    "PAGE_SIZE",
    "matches_filter",
    "max_records_for_network",
    "parse_positions",
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
]
