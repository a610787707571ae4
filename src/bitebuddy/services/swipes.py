"""Swipe ledger."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from bitebuddy.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from bitebuddy.domain.sessions import ACTIVE
from bitebuddy.domain.swipes import MATCHED, NOT_MATCHED, UNKNOWN, Swipe, SwipeOutcome
from bitebuddy.services.matches import MatchDecision, MatchDeriver
from bitebuddy.services.notifications import NotificationService
from bitebuddy.services.sessions import SessionRepository

_logger = logging.getLogger(__name__)


class SwipeRepository(Protocol):
    """Persistence interface for swipes.

    Storage enforces uniqueness on (session_id, user_id, restaurant_id).
    """

    def insert_swipe(
        self, session_id: UUID, user_id: UUID, restaurant_id: UUID, liked: bool
    ) -> Swipe | None:
        """Insert a swipe unless one exists; return the new row or None."""

    def get_swipe(
        self, session_id: UUID, user_id: UUID, restaurant_id: UUID
    ) -> Swipe | None:
        """Return a member's swipe on a candidate, if present."""

    def count_by_user(self, session_id: UUID) -> dict[UUID, int]:
        """Return the number of swipes recorded per user."""


@dataclass
class SwipeService:
    """Records swipes and runs match derivation for likes."""

    repository: SwipeRepository
    session_repository: SessionRepository
    match_deriver: MatchDeriver
    notifications: NotificationService

    async def record_swipe(
        self,
        session_id: UUID,
        user_id: UUID,
        restaurant_id: UUID | None,
        liked: bool | None,
    ) -> SwipeOutcome:
        """Record a member's verdict on a candidate.

        Repeating the same verdict is a no-op; changing it raises
        ConflictError.
        """
        if restaurant_id is None or liked is None:
            raise ValidationError("restaurant_id and liked are required")
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        if session.status != ACTIVE:
            raise StateError("Session is not active")
        if user_id not in self.session_repository.list_member_ids(session_id):
            raise AuthorizationError("You are not a member of this session")
        if self.session_repository.get_candidate(session_id, restaurant_id) is None:
            raise NotFoundError("Restaurant not found in this session")

        swipe = self.repository.insert_swipe(session_id, user_id, restaurant_id, liked)
        if swipe is None:
            swipe = self.repository.get_swipe(session_id, user_id, restaurant_id)
            if swipe is None:
                raise RuntimeError("Failed to record swipe")
            if swipe.liked != liked:
                verdict = "liked" if swipe.liked else "disliked"
                raise ConflictError(f"Restaurant already {verdict}")

        if not swipe.liked:
            return SwipeOutcome(
                swipe=swipe, is_match=False, match=None, match_status=NOT_MATCHED
            )

        try:
            decision = self.match_deriver.derive(session_id, restaurant_id)
        except Exception:
            _logger.exception(
                "Match derivation failed",
                extra={"session_id": session_id, "restaurant_id": restaurant_id},
            )
            return SwipeOutcome(
                swipe=swipe, is_match=False, match=None, match_status=UNKNOWN
            )

        await self._announce(decision)
        if decision.match is None:
            return SwipeOutcome(
                swipe=swipe, is_match=False, match=None, match_status=NOT_MATCHED
            )
        return SwipeOutcome(
            swipe=swipe, is_match=True, match=decision.match, match_status=MATCHED
        )

    async def _announce(self, decision: MatchDecision) -> None:
        if decision.created and decision.match is not None:
            await self.notifications.match_created(decision.match)
