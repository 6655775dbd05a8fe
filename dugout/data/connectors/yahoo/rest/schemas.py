"""Yahoo REST API raw response helpers.

Yahoo renders its XML resources as JSON in a few recurring shapes:

- Collections are objects keyed by numeric strings (``"0"``, ``"1"``, ...)
  plus a ``count`` field; some responses render them as plain arrays, and an
  empty collection is often ``[]``.
- Resources are arrays whose first element is a metadata array of
  single-key objects interleaved with empty arrays, followed by sub-resource
  objects (``player_stats``, ``profile``, ...).
- Stats are wrapped: ``{"stat": {"stat_id": "8", "value": "150"}}``.

These helpers flatten those shapes without validating domain fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ....core.exceptions import MalformedResponseError


class YahooStat(BaseModel):
    """Raw stat entry inside its ``{"stat": ...}`` wrapper."""

    stat_id: int
    value: str | int | float

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("stat_id", mode="before")
    @classmethod
    def coerce_stat_id(cls, v: Any) -> Any:
        """Stat ids arrive as numeric strings."""
        if isinstance(v, str):
            return int(v.strip())
        return v

    @classmethod
    def from_wrapper(cls, wrapper: Any) -> YahooStat | None:
        """Unwrap one stat entry; None when the entry is unusable."""
        if not isinstance(wrapper, dict):
            return None
        inner = wrapper.get("stat", wrapper)
        if not isinstance(inner, dict) or "stat_id" not in inner or "value" not in inner:
            return None
        try:
            return cls.model_validate(inner)
        except ValueError:
            return None


def fantasy_content(response: Any, endpoint_id: str) -> dict[str, Any]:
    """Return the ``fantasy_content`` envelope or raise MalformedResponseError."""
    if not isinstance(response, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(response).__name__}", endpoint_id=endpoint_id
        )
    content = response.get("fantasy_content")
    if not isinstance(content, dict):
        raise MalformedResponseError("Missing fantasy_content envelope", endpoint_id=endpoint_id)
    return content


def collection_entries(collection: Any) -> list[Any]:
    """Entries of a Yahoo collection in index order.

    Accepts the keyed-object form (skipping ``count`` and other non-numeric
    keys) and the array form. Anything else is an empty collection.
    """
    if isinstance(collection, list):
        return list(collection)
    if not isinstance(collection, dict):
        return []
    indexed = [(int(key), value) for key, value in collection.items() if str(key).isdigit()]
    return [value for _, value in sorted(indexed, key=lambda item: item[0])]


def merge_metadata(items: Any) -> dict[str, Any]:
    """Flatten a metadata array of single-key objects into one dict.

    Empty arrays and non-object entries are skipped; later keys win.
    """
    merged: dict[str, Any] = {}
    if not isinstance(items, list):
        return merged
    for item in items:
        if isinstance(item, dict):
            merged.update(item)
    return merged


def resource_parts(resource: Any) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Split a resource array into merged metadata and trailing sub-resources."""
    if isinstance(resource, dict):
        return resource, []
    if not isinstance(resource, list) or not resource:
        return {}, []
    head, *rest = resource
    metadata = merge_metadata(head) if isinstance(head, list) else merge_metadata([head])
    return metadata, [part for part in rest if isinstance(part, dict)]
