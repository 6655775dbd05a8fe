"""Yahoo players collection endpoint definition and adapter.

One page of the game's players, ranked by actual performance and
restricted to active players of one position group:

``/game/{game_key}/players;start={s};count={n};sort=AR;status=A;position={B|P}/stats``
"""

from __future__ import annotations

import logging
from typing import Any

from dugout.data.connectors.yahoo.config import (
    MAX_PLAYERS_PER_REQUEST,
    RESPONSE_FORMAT,
    SORT_ACTUAL_RANK,
    STATUS_ACTIVE,
)
from dugout.data.connectors.yahoo.rest.schemas import (
    YahooStat,
    collection_entries,
    fantasy_content,
    resource_parts,
)
from dugout.data.core import StatType
from dugout.data.core.exceptions import MalformedResponseError
from dugout.data.models import PlayerName, PlayerRecord, StatValue
from dugout.data.runtime.rest import ResponseAdapter, RestEndpointSpec

logger = logging.getLogger(__name__)


def build_path(params: dict[str, Any]) -> str:
    """Build the players collection path with its matrix parameters."""
    count = int(params["count"])
    if not 0 < count <= MAX_PLAYERS_PER_REQUEST:
        raise ValueError(f"count must be between 1 and {MAX_PLAYERS_PER_REQUEST}, got {count}")
    path = (
        f"/game/{params['game_key']}/players"
        f";start={int(params['start'])};count={count}"
        f";sort={SORT_ACTUAL_RANK};status={STATUS_ACTIVE}"
        f";position={params['position']}/stats"
    )
    stat_type = params.get("stat_type")
    if stat_type and StatType(stat_type) != StatType.SEASON:
        path += f";type={StatType(stat_type).value}"
    return path


SPEC = RestEndpointSpec(
    id="players",
    method="GET",
    build_path=build_path,
    build_query=lambda _: dict(RESPONSE_FORMAT),
)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def map_player(entry: Any) -> PlayerRecord | None:
    """Map one collection entry to a PlayerRecord.

    Returns None for entries that carry neither a key nor a name.
    """
    if not isinstance(entry, dict):
        return None
    metadata, parts = resource_parts(entry.get("player"))

    key = _text(metadata.get("player_key"))
    raw_name = metadata.get("name")
    if not isinstance(raw_name, dict):
        raw_name = {}
    name = PlayerName(
        full=_text(raw_name.get("full")),
        first=_text(raw_name.get("first")),
        last=_text(raw_name.get("last")),
    )
    if not key and not (name.full or name.first or name.last):
        return None

    stats: list[StatValue] = []
    for part in parts:
        container = part.get("player_stats")
        if not isinstance(container, dict):
            continue
        for wrapper in container.get("stats") or []:
            raw = YahooStat.from_wrapper(wrapper)
            if raw is not None:
                stats.append(StatValue(stat_id=raw.stat_id, value=raw.value))

    return PlayerRecord(
        key=key,
        name=name,
        team=_text(metadata.get("editorial_team_abbr")),
        positions=_text(metadata.get("display_position")),
        stats=tuple(stats),
    )


class Adapter(ResponseAdapter):
    """Adapter for parsing a players page into PlayerRecords."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[PlayerRecord]:
        """Parse a Yahoo players response.

        Args:
            response: Raw response (``fantasy_content.game = [info, {players}]``)
            params: Request parameters

        Returns:
            Records in upstream rank order; malformed entries are dropped

        Raises:
            MalformedResponseError: The envelope itself is unusable
        """
        content = fantasy_content(response, SPEC.id)
        game = content.get("game")
        if not isinstance(game, list) or not game:
            raise MalformedResponseError("Missing game resource", endpoint_id=SPEC.id)

        # Past the end of the collection the players section is absent or []
        players: Any = None
        for part in game[1:]:
            if isinstance(part, dict) and "players" in part:
                players = part["players"]
                break

        records: list[PlayerRecord] = []
        dropped = 0
        for entry in collection_entries(players):
            record = map_player(entry)
            if record is None:
                dropped += 1
                continue
            records.append(record)

        if dropped:
            logger.debug(
                f"Dropped {dropped} malformed player entries",
                extra={"endpoint_id": SPEC.id, "start": params.get("start")},
            )
        return records
