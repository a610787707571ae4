"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from bitebuddy.domain.errors import ValidationError
from bitebuddy.domain.places import PlaceBusiness
from bitebuddy.domain.sessions import (
    DEFAULT_RADIUS_METERS,
    Candidate,
    Category,
    DiningSession,
    SessionMember,
)
from bitebuddy.services.sessions import SessionRepository

_SESSION_COLUMNS = (
    "id, created_by, name, status, latitude, longitude, radius_meters, "
    "price_filter, category_filter, created_at"
)
_CANDIDATE_COLUMNS = (
    "id, session_id, place_id, name, image_url, rating, review_count, price, "
    "categories, address, latitude, longitude, phone, maps_url, position"
)
_FOREIGN_KEY_VIOLATION = "23503"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for sessions, members and candidates."""

    client: Client

    def create_session(  # noqa: PLR0913
        self,
        owner_id: UUID,
        name: str,
        latitude: float,
        longitude: float,
        radius_meters: int,
        price_filter: list[str] | None,
        category_filter: str | None,
    ) -> DiningSession:
        """Create the session and owner membership in one database call."""
        response = self.client.rpc(
            "create_session",
            {
                "p_owner_id": str(owner_id),
                "p_name": name,
                "p_latitude": latitude,
                "p_longitude": longitude,
                "p_radius_meters": radius_meters,
                "p_price_filter": price_filter,
                "p_category_filter": category_filter,
            },
        ).execute()
        row = _first_row(response.data)
        if row is None:
            raise RuntimeError("Failed to create session")
        return _parse_session(row)

    def get_session(self, session_id: UUID) -> DiningSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def list_sessions(self, session_ids: list[UUID]) -> list[DiningSession]:
        """Return sessions by id, newest first."""
        if not session_ids:
            return []
        response = (
            self.client.table("sessions")
            .select(_SESSION_COLUMNS)
            .in_("id", [str(session_id) for session_id in session_ids])
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_session(row) for row in response.data or []]

    def list_session_ids_for_user(self, user_id: UUID) -> list[UUID]:
        """Return ids of sessions the user belongs to."""
        response = (
            self.client.table("session_members")
            .select("session_id")
            .eq("user_id", str(user_id))
            .execute()
        )
        return [UUID(str(row["session_id"])) for row in response.data or []]

    def list_members(self, session_id: UUID) -> list[SessionMember]:
        """Return a session's members in join order."""
        response = (
            self.client.table("session_members")
            .select("id, session_id, user_id, joined_at")
            .eq("session_id", str(session_id))
            .order("joined_at", desc=False)
            .execute()
        )
        return [_parse_member(row) for row in response.data or []]

    def list_member_ids(self, session_id: UUID) -> set[UUID]:
        """Return the ids of users currently in a session."""
        response = (
            self.client.table("session_members")
            .select("user_id")
            .eq("session_id", str(session_id))
            .execute()
        )
        return {UUID(str(row["user_id"])) for row in response.data or []}

    def add_members(self, session_id: UUID, user_ids: list[UUID]) -> list[UUID]:
        """Upsert memberships, ignoring rows that already exist.

        Unknown user ids violate the profiles foreign key and are raised as
        ValidationError.
        """
        if not user_ids:
            return []
        try:
            response = (
                self.client.table("session_members")
                .upsert(
                    [
                        {"session_id": str(session_id), "user_id": str(user_id)}
                        for user_id in user_ids
                    ],
                    on_conflict="session_id,user_id",
                    ignore_duplicates=True,
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _FOREIGN_KEY_VIOLATION:
                raise ValidationError("One or more users do not exist") from exc
            raise
        return [UUID(str(row["user_id"])) for row in response.data or []]

    def list_candidates(self, session_id: UUID) -> list[Candidate]:
        """Return a session's candidates in insertion order."""
        response = (
            self.client.table("session_restaurants")
            .select(_CANDIDATE_COLUMNS)
            .eq("session_id", str(session_id))
            .order("position", desc=False)
            .execute()
        )
        return [_parse_candidate(row) for row in response.data or []]

    def get_candidate(self, session_id: UUID, candidate_id: UUID) -> Candidate | None:
        """Return a candidate of the session, if present."""
        response = (
            self.client.table("session_restaurants")
            .select(_CANDIDATE_COLUMNS)
            .eq("session_id", str(session_id))
            .eq("id", str(candidate_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_candidate(response.data[0])

    def list_candidates_by_ids(self, candidate_ids: list[UUID]) -> list[Candidate]:
        """Return candidates by id across sessions."""
        if not candidate_ids:
            return []
        response = (
            self.client.table("session_restaurants")
            .select(_CANDIDATE_COLUMNS)
            .in_("id", [str(candidate_id) for candidate_id in candidate_ids])
            .execute()
        )
        return [_parse_candidate(row) for row in response.data or []]

    def count_candidates(self, session_id: UUID) -> int:
        """Return the number of candidates in a session."""
        response = (
            self.client.table("session_restaurants")
            .select("id", count="exact")
            .eq("session_id", str(session_id))
            .execute()
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def activate_session(
        self, session_id: UUID, businesses: list[PlaceBusiness]
    ) -> bool:
        """Run the ``start_session`` function, which commits or rolls back as one."""
        response = self.client.rpc(
            "start_session",
            {
                "p_session_id": str(session_id),
                "p_restaurants": [
                    _candidate_payload(business, position)
                    for position, business in enumerate(businesses)
                ],
            },
        ).execute()
        return bool(response.data)


def _first_row(data: object) -> dict[str, object] | None:
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None


def _candidate_payload(business: PlaceBusiness, position: int) -> dict[str, object]:
    return {
        "place_id": business.id,
        "name": business.name,
        "image_url": business.image_url,
        "rating": business.rating,
        "review_count": business.review_count,
        "price": business.price,
        "categories": [
            {"alias": category.alias, "title": category.title}
            for category in business.categories
        ],
        "address": business.address,
        "latitude": business.latitude,
        "longitude": business.longitude,
        "phone": business.phone,
        "maps_url": business.url,
        "position": position,
    }


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_session(row: dict[str, object]) -> DiningSession:
    return DiningSession(
        id=UUID(str(row["id"])),
        created_by=UUID(str(row["created_by"])),
        name=str(row.get("name", "")),
        status=str(row.get("status", "waiting")),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        radius_meters=int(row.get("radius_meters") or DEFAULT_RADIUS_METERS),
        price_filter=row.get("price_filter") or None,
        category_filter=row.get("category_filter"),
        created_at=_parse_datetime(row.get("created_at")),
    )


def _parse_member(row: dict[str, object]) -> SessionMember:
    return SessionMember(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        user_id=UUID(str(row["user_id"])),
        joined_at=_parse_datetime(row.get("joined_at")),
    )


def _parse_candidate(row: dict[str, object]) -> Candidate:
    rating = row.get("rating")
    review_count = row.get("review_count")
    latitude = row.get("latitude")
    longitude = row.get("longitude")
    return Candidate(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        external_id=str(row.get("place_id", "")),
        name=str(row.get("name", "")),
        image_url=row.get("image_url"),
        rating=float(rating) if rating is not None else None,
        review_count=int(review_count) if review_count is not None else None,
        price=row.get("price"),
        categories=[
            Category(alias=str(c.get("alias", "")), title=str(c.get("title", "")))
            for c in row.get("categories") or []
            if isinstance(c, dict)
        ],
        address=row.get("address"),
        latitude=float(latitude) if latitude is not None else None,
        longitude=float(longitude) if longitude is not None else None,
        phone=row.get("phone"),
        url=row.get("maps_url"),
        position=int(row.get("position") or 0),
    )
