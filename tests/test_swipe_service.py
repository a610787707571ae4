"""Tests for the swipe ledger and match derivation on likes."""

import asyncio
from uuid import UUID, uuid4

import pytest

from bitebuddy.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from bitebuddy.domain.swipes import MATCHED, NOT_MATCHED, UNKNOWN, Match
from tests.conftest import (
    Backend,
    InMemoryMatchRepository,
    build_session_service,
    build_swipe_service,
    place_payload,
)


def _active_session(
    backend: Backend, members: int = 2
) -> tuple[UUID, list[UUID], UUID]:
    """Create a started session with the given number of members and one candidate."""
    backend.places_client.places = [place_payload("r1", "Trattoria")]
    sessions = build_session_service(backend)
    user_ids = [uuid4() for _ in range(members)]
    session = sessions.create(user_ids[0], "Dinner", 37.77, -122.41)
    for user_id in user_ids[1:]:
        sessions.join(session.id, user_id)
    asyncio.run(sessions.start(session.id, user_ids[0]))
    candidate = backend.sessions.list_candidates(session.id)[0]
    return session.id, user_ids, candidate.id


def test_match_created_once_all_members_like(backend: Backend) -> None:
    session_id, (u1, u2), r1 = _active_session(backend)
    service = build_swipe_service(backend)

    first = asyncio.run(service.record_swipe(session_id, u1, r1, True))
    second = asyncio.run(service.record_swipe(session_id, u2, r1, True))

    assert first.is_match is False
    assert first.match_status == NOT_MATCHED
    assert second.is_match is True
    assert second.match_status == MATCHED
    assert backend.matches.count_matches(session_id) == 1
    match_events = [e for e in backend.realtime.events if e[1] == "match"]
    assert len(match_events) == 1
    assert match_events[0][2]["restaurant_id"] == str(r1)


def test_dislike_blocks_match_permanently(backend: Backend) -> None:
    session_id, (u1, u2), r1 = _active_session(backend)
    service = build_swipe_service(backend)

    asyncio.run(service.record_swipe(session_id, u1, r1, True))
    outcome = asyncio.run(service.record_swipe(session_id, u2, r1, False))
    repeat = asyncio.run(service.record_swipe(session_id, u1, r1, True))

    assert outcome.match_status == NOT_MATCHED
    assert repeat.is_match is False
    assert backend.matches.count_matches(session_id) == 0
    with pytest.raises(ConflictError, match="already disliked"):
        asyncio.run(service.record_swipe(session_id, u2, r1, True))


def test_repeat_like_returns_original_swipe(backend: Backend) -> None:
    session_id, (u1, _), r1 = _active_session(backend)
    service = build_swipe_service(backend)

    first = asyncio.run(service.record_swipe(session_id, u1, r1, True))
    second = asyncio.run(service.record_swipe(session_id, u1, r1, True))

    assert first.swipe.id == second.swipe.id
    assert len(backend.swipes.swipes) == 1


def test_changed_verdict_is_rejected(backend: Backend) -> None:
    session_id, (u1, _), r1 = _active_session(backend)
    service = build_swipe_service(backend)
    asyncio.run(service.record_swipe(session_id, u1, r1, True))

    with pytest.raises(ConflictError, match="already liked"):
        asyncio.run(service.record_swipe(session_id, u1, r1, False))
    assert backend.swipes.get_swipe(session_id, u1, r1).liked is True


def test_repeat_like_after_match_reports_existing_match(backend: Backend) -> None:
    session_id, (u1, u2), r1 = _active_session(backend)
    service = build_swipe_service(backend)
    asyncio.run(service.record_swipe(session_id, u1, r1, True))
    created = asyncio.run(service.record_swipe(session_id, u2, r1, True))

    repeat = asyncio.run(service.record_swipe(session_id, u1, r1, True))

    assert repeat.is_match is True
    assert repeat.match == created.match
    assert len([e for e in backend.realtime.events if e[1] == "match"]) == 1


def test_single_member_like_matches_immediately(backend: Backend) -> None:
    session_id, (owner,), r1 = _active_session(backend, members=1)
    service = build_swipe_service(backend)

    outcome = asyncio.run(service.record_swipe(session_id, owner, r1, True))

    assert outcome.is_match is True


def test_swipe_validation(backend: Backend) -> None:
    session_id, (u1, _), r1 = _active_session(backend)
    service = build_swipe_service(backend)

    with pytest.raises(ValidationError):
        asyncio.run(service.record_swipe(session_id, u1, None, True))
    with pytest.raises(ValidationError):
        asyncio.run(service.record_swipe(session_id, u1, r1, None))
    with pytest.raises(NotFoundError, match="Session not found"):
        asyncio.run(service.record_swipe(uuid4(), u1, r1, True))
    with pytest.raises(AuthorizationError):
        asyncio.run(service.record_swipe(session_id, uuid4(), r1, True))
    with pytest.raises(NotFoundError, match="Restaurant not found"):
        asyncio.run(service.record_swipe(session_id, u1, uuid4(), True))


def test_swipe_requires_active_session(backend: Backend) -> None:
    sessions = build_session_service(backend)
    owner_id = uuid4()
    session = sessions.create(owner_id, "Lunch", 1.0, 2.0)
    service = build_swipe_service(backend)

    with pytest.raises(StateError, match="not active"):
        asyncio.run(service.record_swipe(session.id, owner_id, uuid4(), True))


class _FailingMatchRepository(InMemoryMatchRepository):
    def insert_if_consensus(
        self, session_id: UUID, restaurant_id: UUID
    ) -> Match | None:
        raise RuntimeError("matches table unavailable")


def test_derivation_failure_keeps_swipe_and_reports_unknown(backend: Backend) -> None:
    session_id, (owner,), r1 = _active_session(backend, members=1)
    failing = _FailingMatchRepository(backend.sessions, backend.swipes)
    service = build_swipe_service(backend, match_repository=failing)

    outcome = asyncio.run(service.record_swipe(session_id, owner, r1, True))

    assert outcome.match_status == UNKNOWN
    assert outcome.is_match is False
    assert backend.swipes.get_swipe(session_id, owner, r1) is not None


def test_notification_failure_does_not_fail_swipe(backend: Backend) -> None:
    session_id, (owner,), r1 = _active_session(backend, members=1)
    backend.realtime.fail = True
    service = build_swipe_service(backend)

    outcome = asyncio.run(service.record_swipe(session_id, owner, r1, True))

    assert outcome.is_match is True
    assert backend.matches.count_matches(session_id) == 1
