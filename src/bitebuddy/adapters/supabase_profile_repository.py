"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from bitebuddy.domain.models import Profile
from bitebuddy.services.profiles import ProfileRepository

_COLUMNS = "id, username, display_name, avatar_url, created_at"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return a profile by user id, if present."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_profile(response.data[0])

    def get_by_username(self, username: str) -> Profile | None:
        """Return a profile by exact username, if present."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_profile(response.data[0])

    def list_profiles(self, user_ids: list[UUID]) -> list[Profile]:
        """Return profiles for the given user ids."""
        if not user_ids:
            return []
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .in_("id", [str(user_id) for user_id in user_ids])
            .execute()
        )
        return [parse_profile(row) for row in response.data or []]

    def create_profile(
        self, user_id: UUID, username: str, display_name: str
    ) -> Profile:
        """Create a profile row and return it."""
        response = (
            self.client.table("profiles")
            .insert(
                {
                    "id": str(user_id),
                    "username": username,
                    "display_name": display_name,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile")
        return parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Update a profile row and return it."""
        response = (
            self.client.table("profiles")
            .update(payload)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update profile")
        return parse_profile(response.data[0])

    def search_profiles(
        self, query: str, exclude_user_id: UUID, limit: int
    ) -> list[Profile]:
        """Return profiles whose username contains the query."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .ilike("username", f"%{query}%")
            .neq("id", str(exclude_user_id))
            .limit(limit)
            .execute()
        )
        return [parse_profile(row) for row in response.data or []]


def parse_profile(row: dict[str, object]) -> Profile:
    """Parse a profiles row into a domain model."""
    created_raw = row.get("created_at")
    return Profile(
        id=UUID(str(row["id"])),
        username=str(row.get("username", "")),
        display_name=str(row.get("display_name", "")),
        avatar_url=row.get("avatar_url"),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
