"""Session lifecycle: create, invite, join and start."""

import logging
import math
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from bitebuddy.domain.errors import (
    AuthorizationError,
    NotFoundError,
    StateError,
    ValidationError,
)
from bitebuddy.domain.places import CUISINE_TYPES, PRICE_TO_LEVEL, PlaceBusiness
from bitebuddy.domain.sessions import (
    ACTIVE,
    COMPLETED,
    DEFAULT_RADIUS_METERS,
    SESSION_STATUSES,
    WAITING,
    Candidate,
    DiningSession,
    SessionDetails,
    SessionMember,
    effective_status,
)
from bitebuddy.services.matches import MatchRepository
from bitebuddy.services.notifications import NotificationService
from bitebuddy.services.places import PlacesService, cuisine_types, map_price_filter
from bitebuddy.services.profiles import ProfileRepository

MAX_LATITUDE = 90
MAX_LONGITUDE = 180

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for sessions, members and candidates."""

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
        """Create a waiting session with its owner as first member."""

    def get_session(self, session_id: UUID) -> DiningSession | None:
        """Return a session by id, if present."""

    def list_sessions(self, session_ids: list[UUID]) -> list[DiningSession]:
        """Return sessions by id, newest first."""

    def list_session_ids_for_user(self, user_id: UUID) -> list[UUID]:
        """Return ids of sessions the user belongs to."""

    def list_members(self, session_id: UUID) -> list[SessionMember]:
        """Return a session's members in join order."""

    def list_member_ids(self, session_id: UUID) -> set[UUID]:
        """Return the ids of users currently in a session."""

    def add_members(self, session_id: UUID, user_ids: list[UUID]) -> list[UUID]:
        """Upsert memberships and return the ids that were newly added."""

    def list_candidates(self, session_id: UUID) -> list[Candidate]:
        """Return a session's candidates in insertion order."""

    def get_candidate(self, session_id: UUID, candidate_id: UUID) -> Candidate | None:
        """Return a candidate of the session, if present."""

    def list_candidates_by_ids(self, candidate_ids: list[UUID]) -> list[Candidate]:
        """Return candidates by id across sessions."""

    def count_candidates(self, session_id: UUID) -> int:
        """Return the number of candidates in a session."""

    def activate_session(
        self, session_id: UUID, businesses: list[PlaceBusiness]
    ) -> bool:
        """Insert candidates and flip a waiting session to active atomically.

        Returns False, leaving storage untouched, when the session is no
        longer waiting.
        """


class SwipeCounter(Protocol):
    """Read access to per-member swipe counts."""

    def count_by_user(self, session_id: UUID) -> dict[UUID, int]:
        """Return the number of swipes recorded per user."""


@dataclass
class SessionService:
    """Application service for the session state machine."""

    repository: SessionRepository
    swipe_counter: SwipeCounter
    match_repository: MatchRepository
    profile_repository: ProfileRepository
    places_service: PlacesService
    notifications: NotificationService

    def create(  # noqa: PLR0913
        self,
        owner_id: UUID,
        name: str | None,
        latitude: float | None,
        longitude: float | None,
        radius_meters: int | None = None,
        price_filter: list[str] | None = None,
        category_filter: str | None = None,
    ) -> DiningSession:
        """Create a session in the waiting state."""
        if not name or not name.strip() or latitude is None or longitude is None:
            raise ValidationError("Name, latitude, and longitude are required")
        if (
            not (math.isfinite(latitude) and math.isfinite(longitude))
            or abs(latitude) > MAX_LATITUDE
            or abs(longitude) > MAX_LONGITUDE
        ):
            raise ValidationError("Latitude or longitude is out of range")
        radius = DEFAULT_RADIUS_METERS if radius_meters is None else radius_meters
        if radius <= 0:
            raise ValidationError("radius_meters must be positive")
        if price_filter and any(p not in PRICE_TO_LEVEL for p in price_filter):
            raise ValidationError("price_filter values must be one of $, $$, $$$, $$$$")
        if category_filter is not None and category_filter not in CUISINE_TYPES:
            raise ValidationError(f"Unknown category_filter: {category_filter}")

        session = self.repository.create_session(
            owner_id=owner_id,
            name=name.strip(),
            latitude=latitude,
            longitude=longitude,
            radius_meters=radius,
            price_filter=list(price_filter) if price_filter else None,
            category_filter=category_filter,
        )
        _logger.info("Session created: id=%s owner=%s", session.id, owner_id)
        return session

    def list_for_user(
        self, user_id: UUID, status: str | None = None
    ) -> list[DiningSession]:
        """Return the user's sessions newest first, with derived status."""
        if status is not None and status not in SESSION_STATUSES:
            raise ValidationError(f"Unknown status: {status}")
        session_ids = self.repository.list_session_ids_for_user(user_id)
        if not session_ids:
            return []
        sessions = [
            self._with_effective_status(session)
            for session in self.repository.list_sessions(session_ids)
        ]
        if status is None:
            return sessions
        return [session for session in sessions if session.status == status]

    def get_details(self, session_id: UUID, requester_id: UUID) -> SessionDetails:
        """Return a session with members and counters."""
        session = self._require_session(session_id)
        members = self.repository.list_members(session_id)
        if requester_id not in {m.user_id for m in members}:
            raise AuthorizationError("You are not a member of this session")
        profiles = {
            profile.id: profile
            for profile in self.profile_repository.list_profiles(
                [m.user_id for m in members]
            )
        }
        return SessionDetails(
            session=self._with_effective_status(session),
            members=[replace(m, profile=profiles.get(m.user_id)) for m in members],
            restaurant_count=self.repository.count_candidates(session_id),
            match_count=self.match_repository.count_matches(session_id),
        )

    async def invite(
        self, session_id: UUID, requester_id: UUID, user_ids: list[UUID] | None
    ) -> list[SessionMember]:
        """Add users to a session; already-invited users are left as they are."""
        if not user_ids:
            raise ValidationError("user_ids are required")
        session = self._require_session(session_id)
        self._require_member(session_id, requester_id)
        self._require_open(session)
        added = self.repository.add_members(session_id, list(dict.fromkeys(user_ids)))
        await self.notifications.members_invited(session_id, added)
        return self.repository.list_members(session_id)

    def join(self, session_id: UUID, user_id: UUID) -> SessionMember:
        """Add the caller to a session; joining twice is a no-op."""
        session = self._require_session(session_id)
        self._require_open(session)
        self.repository.add_members(session_id, [user_id])
        for member in self.repository.list_members(session_id):
            if member.user_id == user_id:
                return member
        raise RuntimeError("Failed to join session")

    async def start(self, session_id: UUID, requester_id: UUID) -> int:
        """Import candidates from places search and open the session for swiping.

        Returns the number of candidates imported.
        """
        session = self._require_session(session_id)
        if session.created_by != requester_id:
            raise AuthorizationError("Only the session creator can start it")
        if session.status != WAITING:
            raise StateError("Session has already been started")

        businesses = await self.places_service.search_restaurants(
            latitude=session.latitude,
            longitude=session.longitude,
            radius=session.radius_meters,
            price_levels=map_price_filter(session.price_filter),
            included_types=(
                cuisine_types(session.category_filter)
                if session.category_filter
                else None
            ),
        )
        if not businesses:
            raise NotFoundError("No restaurants found for the given criteria")

        unique = _dedupe(businesses)
        if not self.repository.activate_session(session_id, unique):
            raise StateError("Session has already been started")
        _logger.info(
            "Session started: id=%s restaurants=%s", session_id, len(unique)
        )
        await self.notifications.session_started(session_id, len(unique))
        return len(unique)

    def list_candidates(self, session_id: UUID, requester_id: UUID) -> list[Candidate]:
        """Return candidates by rating, highest first, stable on insertion order."""
        self._require_session(session_id)
        self._require_member(session_id, requester_id)
        candidates = sorted(
            self.repository.list_candidates(session_id),
            key=lambda c: c.position,
        )
        return sorted(
            candidates, key=lambda c: (c.rating is None, -(c.rating or 0.0))
        )

    def _require_session(self, session_id: UUID) -> DiningSession:
        session = self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def _require_member(self, session_id: UUID, user_id: UUID) -> None:
        if user_id not in self.repository.list_member_ids(session_id):
            raise AuthorizationError("You are not a member of this session")

    def _require_open(self, session: DiningSession) -> None:
        if self._with_effective_status(session).status == COMPLETED:
            raise StateError("Session is already completed")

    def _with_effective_status(self, session: DiningSession) -> DiningSession:
        if session.status != ACTIVE:
            return session
        status = effective_status(
            session,
            member_ids=self.repository.list_member_ids(session.id),
            candidate_count=self.repository.count_candidates(session.id),
            swipe_progress=self.swipe_counter.count_by_user(session.id),
        )
        return replace(session, status=status)


def _dedupe(businesses: list[PlaceBusiness]) -> list[PlaceBusiness]:
    """Drop repeated place ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for business in businesses:
        if business.id in seen:
            continue
        seen.add(business.id)
        unique.append(business)
    return unique
