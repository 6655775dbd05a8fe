"""Yahoo games endpoint definition and adapter.

Resolves the opaque game key for a sport and season:
``/games;game_codes=mlb;seasons={year}``.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dugout.data.connectors.yahoo.config import GAME_CODE, RESPONSE_FORMAT
from dugout.data.connectors.yahoo.rest.schemas import (
    collection_entries,
    fantasy_content,
    resource_parts,
)
from dugout.data.models import GameInfo
from dugout.data.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    """Build the games collection path for one season."""
    game_code = params.get("game_code", GAME_CODE)
    return f"/games;game_codes={game_code};seasons={params['season']}"


SPEC = RestEndpointSpec(
    id="games",
    method="GET",
    build_path=build_path,
    build_query=lambda _: dict(RESPONSE_FORMAT),
)


class Adapter(ResponseAdapter):
    """Adapter for parsing the games collection into GameInfo entries."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[GameInfo]:
        content = fantasy_content(response, SPEC.id)
        games: list[GameInfo] = []
        for entry in collection_entries(content.get("games")):
            if not isinstance(entry, dict):
                continue
            metadata, _ = resource_parts(entry.get("game"))
            try:
                games.append(GameInfo.model_validate(metadata))
            except PydanticValidationError:
                continue
        return games
