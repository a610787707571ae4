"""Match derivation from the swipe ledger."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from bitebuddy.domain.swipes import Match

_logger = logging.getLogger(__name__)


class MatchRepository(Protocol):
    """Persistence interface for matches.

    Storage enforces uniqueness on (session_id, restaurant_id).
    """

    def insert_if_consensus(
        self, session_id: UUID, restaurant_id: UUID
    ) -> Match | None:
        """Insert a match if every current member liked the candidate.

        The membership check and the insert happen in one storage statement.
        Returns the new row, or None when consensus does not hold or the
        match already exists.
        """

    def get_match(self, session_id: UUID, restaurant_id: UUID) -> Match | None:
        """Return the match for a candidate, if present."""

    def list_matches(self, session_id: UUID) -> list[Match]:
        """Return a session's matches, newest first."""

    def count_matches(self, session_id: UUID) -> int:
        """Return the number of matches in a session."""

    def list_recent_matches(self, session_ids: list[UUID], limit: int) -> list[Match]:
        """Return matches across sessions, newest first."""


@dataclass(frozen=True)
class MatchDecision:
    """Outcome of a consensus check."""

    match: Match | None
    created: bool = False


def has_consensus(member_ids: set[UUID], liker_ids: set[UUID]) -> bool:
    """Return true when every current member liked the candidate."""
    return bool(member_ids) and member_ids <= liker_ids


@dataclass
class MatchDeriver:
    """Creates a match once every member has liked a candidate.

    Runs after the triggering swipe is committed, so of two concurrent swipes
    the later one always observes the earlier. Matches are never removed.
    """

    repository: MatchRepository

    def derive(self, session_id: UUID, restaurant_id: UUID) -> MatchDecision:
        """Record a match if consensus holds and return the candidate's match."""
        created = self.repository.insert_if_consensus(session_id, restaurant_id)
        if created is not None:
            _logger.info(
                "Match created: session=%s restaurant=%s", session_id, restaurant_id
            )
            return MatchDecision(match=created, created=True)
        return MatchDecision(match=self.repository.get_match(session_id, restaurant_id))
