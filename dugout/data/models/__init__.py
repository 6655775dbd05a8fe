"""Data models for fantasy data types.

Architecture:
    Pydantic v2 models are immutable (frozen=True) so a dataset can be shared
    between the fetch layer and any number of materialized views without
    defensive copies. The resource selector is a frozen dataclass because it
    is compared by value for staleness checks and used as a cache key.

Model Categories:
    - Players: PlayerName, StatValue, PlayerRecord, RankedPlayerRecord
    - Auth: Credential, TokenGrant
    - Metadata: GameInfo, UserProfile
    - Requests: ResourceSelector
"""

from .credential import REFRESH_ACCESS_TOKEN_ERROR, Credential, TokenGrant
from .game import GameInfo, UserProfile
from .player import PlayerName, PlayerRecord, RankedPlayerRecord, StatValue
from .selector import ResourceSelector

__all__ = [
    "Credential",
    "GameInfo",
    "PlayerName",
    "PlayerRecord",
    "REFRESH_ACCESS_TOKEN_ERROR",
    "RankedPlayerRecord",
    "ResourceSelector",
    "StatValue",
    "TokenGrant",
    "UserProfile",
]
