"""Domain models for dining sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from bitebuddy.domain.models import Profile

WAITING = "waiting"
ACTIVE = "active"
COMPLETED = "completed"

SESSION_STATUSES = (WAITING, ACTIVE, COMPLETED)
DEFAULT_RADIUS_METERS = 5000


@dataclass(frozen=True)
class DiningSession:
    """A group decision round over a fixed candidate set."""

    id: UUID
    created_by: UUID
    name: str
    status: str
    latitude: float
    longitude: float
    radius_meters: int
    price_filter: list[str] | None
    category_filter: str | None
    created_at: datetime | None = None


@dataclass(frozen=True)
class SessionMember:
    """Membership of a user in a session."""

    id: UUID
    session_id: UUID
    user_id: UUID
    joined_at: datetime | None = None
    profile: Profile | None = None


@dataclass(frozen=True)
class Category:
    """Restaurant category label."""

    alias: str
    title: str


@dataclass(frozen=True)
class Candidate:
    """Restaurant imported into a session when it starts."""

    id: UUID
    session_id: UUID
    external_id: str
    name: str
    image_url: str | None
    rating: float | None
    review_count: int | None
    price: str | None
    categories: list[Category] = field(default_factory=list)
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    phone: str | None = None
    url: str | None = None
    position: int = 0


@dataclass(frozen=True)
class SessionDetails:
    """Session with its members and counters."""

    session: DiningSession
    members: list[SessionMember]
    restaurant_count: int
    match_count: int


def effective_status(
    session: DiningSession,
    member_ids: set[UUID],
    candidate_count: int,
    swipe_progress: dict[UUID, int],
) -> str:
    """Return the status clients should see.

    The stored status never holds ``completed``; an active session is reported
    as completed once every current member has swiped every candidate.
    """
    if session.status != ACTIVE or candidate_count == 0 or not member_ids:
        return session.status
    if all(swipe_progress.get(user_id, 0) >= candidate_count for user_id in member_ids):
        return COMPLETED
    return session.status
