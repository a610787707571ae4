"""Supabase-backed friendship repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from bitebuddy.domain.errors import ConflictError, NotFoundError
from bitebuddy.domain.friends import Friendship
from bitebuddy.services.friends import FriendshipRepository

_COLUMNS = "id, requester_id, addressee_id, status, created_at"
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


@dataclass
class SupabaseFriendshipRepository(FriendshipRepository):
    """Supabase implementation for friendships."""

    client: Client

    def get_friendship(self, friendship_id: UUID) -> Friendship | None:
        """Return a friendship by id, if present."""
        response = (
            self.client.table("friendships")
            .select(_COLUMNS)
            .eq("id", str(friendship_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_friendship(response.data[0])

    def find_between(self, user_a: UUID, user_b: UUID) -> Friendship | None:
        """Return the friendship between two users in either direction."""
        response = (
            self.client.table("friendships")
            .select(_COLUMNS)
            .or_(
                f"and(requester_id.eq.{user_a},addressee_id.eq.{user_b}),"
                f"and(requester_id.eq.{user_b},addressee_id.eq.{user_a})"
            )
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_friendship(response.data[0])

    def create_friendship(self, requester_id: UUID, addressee_id: UUID) -> Friendship:
        """Create a pending friendship and return it.

        A concurrent request between the same pair hits the pair index and is
        raised as ConflictError.
        """
        try:
            response = (
                self.client.table("friendships")
                .insert(
                    {
                        "requester_id": str(requester_id),
                        "addressee_id": str(addressee_id),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise ConflictError("Friend request already pending") from exc
            if exc.code == _FOREIGN_KEY_VIOLATION:
                raise NotFoundError("User not found") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create friendship")
        return _parse_friendship(response.data[0])

    def update_status(self, friendship_id: UUID, status: str) -> Friendship:
        """Set a friendship status and return the updated row."""
        response = (
            self.client.table("friendships")
            .update({"status": status})
            .eq("id", str(friendship_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update friendship")
        return _parse_friendship(response.data[0])

    def list_for_user(self, user_id: UUID, status: str) -> list[Friendship]:
        """Return friendships in a status where the user is either party."""
        response = (
            self.client.table("friendships")
            .select(_COLUMNS)
            .eq("status", status)
            .or_(f"requester_id.eq.{user_id},addressee_id.eq.{user_id}")
            .execute()
        )
        return [_parse_friendship(row) for row in response.data or []]

    def list_incoming(self, user_id: UUID, status: str) -> list[Friendship]:
        """Return friendships addressed to the user."""
        response = (
            self.client.table("friendships")
            .select(_COLUMNS)
            .eq("addressee_id", str(user_id))
            .eq("status", status)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_friendship(row) for row in response.data or []]

    def list_outgoing(self, user_id: UUID, status: str) -> list[Friendship]:
        """Return friendships requested by the user."""
        response = (
            self.client.table("friendships")
            .select(_COLUMNS)
            .eq("requester_id", str(user_id))
            .eq("status", status)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_friendship(row) for row in response.data or []]


def _parse_friendship(row: dict[str, object]) -> Friendship:
    created_raw = row.get("created_at")
    return Friendship(
        id=UUID(str(row["id"])),
        requester_id=UUID(str(row["requester_id"])),
        addressee_id=UUID(str(row["addressee_id"])),
        status=str(row.get("status", "pending")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
