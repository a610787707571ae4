"""Read-only projections of session progress and matches."""

from dataclasses import dataclass
from uuid import UUID

from bitebuddy.domain.errors import AuthorizationError, NotFoundError, ValidationError
from bitebuddy.domain.sessions import effective_status
from bitebuddy.domain.swipes import MatchWithCandidate, RecentMatch, SessionResults
from bitebuddy.services.matches import MatchRepository
from bitebuddy.services.sessions import SessionRepository
from bitebuddy.services.swipes import SwipeRepository

DEFAULT_RECENT_LIMIT = 10
MAX_RECENT_LIMIT = 50


@dataclass
class ResultsService:
    """Service for session results and cross-session match history."""

    session_repository: SessionRepository
    swipe_repository: SwipeRepository
    match_repository: MatchRepository

    def results(self, session_id: UUID, requester_id: UUID) -> SessionResults:
        """Return matches, candidate total and per-member swipe counts."""
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        member_ids = self.session_repository.list_member_ids(session_id)
        if requester_id not in member_ids:
            raise AuthorizationError("You are not a member of this session")

        candidates = {c.id: c for c in self.session_repository.list_candidates(session_id)}
        progress = self.swipe_repository.count_by_user(session_id)
        matches = sorted(
            self.match_repository.list_matches(session_id),
            key=lambda m: m.matched_at,
            reverse=True,
        )
        return SessionResults(
            status=effective_status(session, member_ids, len(candidates), progress),
            matches=[
                MatchWithCandidate(match=m, restaurant=candidates.get(m.restaurant_id))
                for m in matches
            ],
            total_restaurants=len(candidates),
            swipe_progress=progress,
        )

    def recent_matches(
        self, user_id: UUID, limit: int = DEFAULT_RECENT_LIMIT
    ) -> list[RecentMatch]:
        """Return the newest matches across every session the user is in."""
        if limit < 1:
            raise ValidationError("limit must be a positive integer")
        limit = min(limit, MAX_RECENT_LIMIT)
        session_ids = self.session_repository.list_session_ids_for_user(user_id)
        if not session_ids:
            return []

        matches = sorted(
            self.match_repository.list_recent_matches(session_ids, limit),
            key=lambda m: m.matched_at,
            reverse=True,
        )[:limit]
        if not matches:
            return []
        sessions = {
            s.id: s
            for s in self.session_repository.list_sessions(
                list({m.session_id for m in matches})
            )
        }
        candidates = {
            c.id: c
            for c in self.session_repository.list_candidates_by_ids(
                list({m.restaurant_id for m in matches})
            )
        }
        recent = []
        for match in matches:
            session = sessions.get(match.session_id)
            candidate = candidates.get(match.restaurant_id)
            recent.append(
                RecentMatch(
                    match_id=match.id,
                    session_id=match.session_id,
                    session_name=session.name if session else "Unknown Session",
                    restaurant_name=(
                        candidate.name if candidate else "Unknown Restaurant"
                    ),
                    restaurant_image_url=candidate.image_url if candidate else None,
                    restaurant_rating=candidate.rating if candidate else None,
                    matched_at=match.matched_at,
                )
            )
        return recent
