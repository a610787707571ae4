"""Supabase-backed match repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from bitebuddy.domain.swipes import Match
from bitebuddy.services.matches import MatchRepository

_COLUMNS = "id, session_id, restaurant_id, matched_at"


@dataclass
class SupabaseMatchRepository(MatchRepository):
    """Supabase implementation for matches."""

    client: Client

    def insert_if_consensus(
        self, session_id: UUID, restaurant_id: UUID
    ) -> Match | None:
        """Run ``derive_match``, which checks consensus and inserts in one statement."""
        response = self.client.rpc(
            "derive_match",
            {
                "p_session_id": str(session_id),
                "p_restaurant_id": str(restaurant_id),
            },
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            return None
        return _parse_match(data)

    def get_match(self, session_id: UUID, restaurant_id: UUID) -> Match | None:
        """Return the match for a candidate, if present."""
        response = (
            self.client.table("matches")
            .select(_COLUMNS)
            .eq("session_id", str(session_id))
            .eq("restaurant_id", str(restaurant_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_match(response.data[0])

    def list_matches(self, session_id: UUID) -> list[Match]:
        """Return a session's matches, newest first."""
        response = (
            self.client.table("matches")
            .select(_COLUMNS)
            .eq("session_id", str(session_id))
            .order("matched_at", desc=True)
            .execute()
        )
        return [_parse_match(row) for row in response.data or []]

    def count_matches(self, session_id: UUID) -> int:
        """Return the number of matches in a session."""
        response = (
            self.client.table("matches")
            .select("id", count="exact")
            .eq("session_id", str(session_id))
            .execute()
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def list_recent_matches(self, session_ids: list[UUID], limit: int) -> list[Match]:
        """Return matches across sessions, newest first."""
        if not session_ids:
            return []
        response = (
            self.client.table("matches")
            .select(_COLUMNS)
            .in_("session_id", [str(session_id) for session_id in session_ids])
            .order("matched_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_match(row) for row in response.data or []]


def _parse_match(row: dict[str, object]) -> Match:
    return Match(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        restaurant_id=UUID(str(row["restaurant_id"])),
        matched_at=datetime.fromisoformat(str(row["matched_at"])),
    )
