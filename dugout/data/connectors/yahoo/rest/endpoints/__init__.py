"""Yahoo REST endpoint registry.

This module exports all endpoint specifications and adapters from the
modular endpoint structure.
"""

from __future__ import annotations

from dugout.data.runtime.rest import ResponseAdapter, RestEndpointSpec

from .games import SPEC as GamesSpec  # noqa: N811
from .games import Adapter as GamesAdapter
from .players import SPEC as PlayersSpec  # noqa: N811
from .players import Adapter as PlayersAdapter
from .users import SPEC as UsersSpec  # noqa: N811
from .users import Adapter as UsersAdapter

# Registry mapping endpoint IDs to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    "games": (GamesSpec, GamesAdapter),
    "players": (PlayersSpec, PlayersAdapter),
    "users": (UsersSpec, UsersAdapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "players", "games")

    Returns:
        RestEndpointSpec if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Get endpoint adapter class by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "players", "games")

    Returns:
        Adapter class if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    """List all available endpoint IDs."""
    return list(_ENDPOINT_REGISTRY.keys())
