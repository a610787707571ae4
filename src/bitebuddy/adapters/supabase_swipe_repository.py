"""Supabase-backed swipe ledger."""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from bitebuddy.domain.swipes import Swipe
from bitebuddy.services.swipes import SwipeRepository

_COLUMNS = "id, session_id, user_id, restaurant_id, liked, created_at"


@dataclass
class SupabaseSwipeRepository(SwipeRepository):
    """Supabase implementation for swipes."""

    client: Client

    def insert_swipe(
        self, session_id: UUID, user_id: UUID, restaurant_id: UUID, liked: bool
    ) -> Swipe | None:
        """Insert a swipe, returning None if the member already swiped it."""
        response = (
            self.client.table("swipes")
            .upsert(
                {
                    "session_id": str(session_id),
                    "user_id": str(user_id),
                    "restaurant_id": str(restaurant_id),
                    "liked": liked,
                },
                on_conflict="session_id,user_id,restaurant_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if not response.data:
            return None
        return _parse_swipe(response.data[0])

    def get_swipe(
        self, session_id: UUID, user_id: UUID, restaurant_id: UUID
    ) -> Swipe | None:
        """Return a member's swipe on a candidate, if present."""
        response = (
            self.client.table("swipes")
            .select(_COLUMNS)
            .eq("session_id", str(session_id))
            .eq("user_id", str(user_id))
            .eq("restaurant_id", str(restaurant_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_swipe(response.data[0])

    def count_by_user(self, session_id: UUID) -> dict[UUID, int]:
        """Return the number of swipes recorded per user."""
        response = (
            self.client.table("swipes")
            .select("user_id")
            .eq("session_id", str(session_id))
            .execute()
        )
        counts = Counter(UUID(str(row["user_id"])) for row in response.data or [])
        return dict(counts)


def _parse_swipe(row: dict[str, object]) -> Swipe:
    created_raw = row.get("created_at")
    return Swipe(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        user_id=UUID(str(row["user_id"])),
        restaurant_id=UUID(str(row["restaurant_id"])),
        liked=bool(row["liked"]),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
