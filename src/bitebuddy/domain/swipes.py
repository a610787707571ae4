"""Domain models for swipes and matches."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from bitebuddy.domain.sessions import Candidate

MATCHED = "matched"
NOT_MATCHED = "not_matched"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class Swipe:
    """One member's verdict on one candidate."""

    id: UUID
    session_id: UUID
    user_id: UUID
    restaurant_id: UUID
    liked: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class Match:
    """Candidate liked by every member of a session."""

    id: UUID
    session_id: UUID
    restaurant_id: UUID
    matched_at: datetime


@dataclass(frozen=True)
class SwipeOutcome:
    """Result of recording a swipe."""

    swipe: Swipe
    is_match: bool
    match: Match | None
    match_status: str


@dataclass(frozen=True)
class MatchWithCandidate:
    """Match joined with the matched restaurant."""

    match: Match
    restaurant: Candidate | None


@dataclass(frozen=True)
class SessionResults:
    """Projection of a session's matches and swipe progress."""

    status: str
    matches: list[MatchWithCandidate]
    total_restaurants: int
    swipe_progress: dict[UUID, int]


@dataclass(frozen=True)
class RecentMatch:
    """Match summary across sessions."""

    match_id: UUID
    session_id: UUID
    session_name: str
    restaurant_name: str
    restaurant_image_url: str | None
    restaurant_rating: float | None
    matched_at: datetime
