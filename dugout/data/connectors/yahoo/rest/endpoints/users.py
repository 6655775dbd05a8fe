"""Yahoo users endpoint definition and adapter (signed-in user's profile)."""

from __future__ import annotations

from typing import Any

from dugout.data.connectors.yahoo.config import RESPONSE_FORMAT
from dugout.data.connectors.yahoo.rest.schemas import collection_entries, fantasy_content
from dugout.data.models import UserProfile
from dugout.data.runtime.rest import ResponseAdapter, RestEndpointSpec

SPEC = RestEndpointSpec(
    id="users",
    method="GET",
    build_path=lambda _: "/users;use_login=1/profile",
    build_query=lambda _: dict(RESPONSE_FORMAT),
)


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class Adapter(ResponseAdapter):
    """Adapter extracting the first user's profile.

    Each user is ``[{guid}, {profile: {...}}]``; any missing layer yields an
    empty profile rather than an error.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> UserProfile:
        content = fantasy_content(response, SPEC.id)
        users = collection_entries(content.get("users"))
        if not users or not isinstance(users[0], dict):
            return UserProfile()

        profile: dict[str, Any] = {}
        for part in users[0].get("user") or []:
            if isinstance(part, dict) and isinstance(part.get("profile"), dict):
                profile = part["profile"]
                break

        return UserProfile(
            display_name=_optional_text(profile.get("display_name")),
            profile_url=_optional_text(profile.get("fantasy_profile_url")),
            image_url=_optional_text(profile.get("image_url")),
        )
