"""Game (season) and user profile models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GameInfo(BaseModel):
    """Upstream game entry; one per sport and season."""

    game_key: str = Field(..., min_length=1)
    game_id: str | None = None
    name: str | None = None
    code: str | None = None
    season: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


class UserProfile(BaseModel):
    """Signed-in user's profile; every field may be missing upstream."""

    display_name: str | None = None
    profile_url: str | None = None
    image_url: str | None = None

    model_config = ConfigDict(frozen=True)
