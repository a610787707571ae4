"""Session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from bitebuddy.api.dependencies import get_container, require_user
from bitebuddy.api.schemas import (  # noqa: TC001
    CreateSessionRequest,
    InviteFriendsRequest,
    SwipeRequest,
)
from bitebuddy.api.serializers import (
    serialize_candidate,
    serialize_member,
    serialize_recent_match,
    serialize_results,
    serialize_session,
    serialize_session_details,
    serialize_swipe_outcome,
)
from bitebuddy.domain.models import AuthenticatedUser  # noqa: TC001
from bitebuddy.services.results import DEFAULT_RECENT_LIMIT

if TYPE_CHECKING:
    from bitebuddy.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("")
async def list_sessions(
    request: Request,
    status_filter: str | None = Query(default=None, alias="status"),
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's sessions, newest first."""
    container: AppContainer = get_container(request)
    sessions = container.session_service.list_for_user(user.id, status_filter)
    return {"data": [serialize_session(s) for s in sessions]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    body: CreateSessionRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Create a session owned by the caller."""
    container: AppContainer = get_container(request)
    session = container.session_service.create(
        owner_id=user.id,
        name=body.name,
        latitude=body.latitude,
        longitude=body.longitude,
        radius_meters=body.radius_meters,
        price_filter=body.price_filter,
        category_filter=body.category_filter,
    )
    return {"data": serialize_session(session)}


@router.get("/recent-matches")
async def recent_matches(
    request: Request,
    limit: int = DEFAULT_RECENT_LIMIT,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Return the newest matches across the caller's sessions."""
    container: AppContainer = get_container(request)
    matches = container.results_service.recent_matches(user.id, limit)
    return {"data": {"matches": [serialize_recent_match(m) for m in matches]}}


@router.get("/{session_id}")
async def session_detail(
    session_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Return a session with its members and counters."""
    container: AppContainer = get_container(request)
    details = container.session_service.get_details(session_id, user.id)
    return {"data": serialize_session_details(details)}


@router.post("/{session_id}/invite", status_code=status.HTTP_201_CREATED)
async def invite(
    session_id: UUID,
    body: InviteFriendsRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Invite users to a session."""
    container: AppContainer = get_container(request)
    members = await container.session_service.invite(
        session_id, user.id, body.user_ids
    )
    return {"data": [serialize_member(m) for m in members]}


@router.post("/{session_id}/join", status_code=status.HTTP_201_CREATED)
async def join(
    session_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Join a session as the caller."""
    container: AppContainer = get_container(request)
    member = container.session_service.join(session_id, user.id)
    return {"data": serialize_member(member)}


@router.post("/{session_id}/start")
async def start(
    session_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Load restaurants and open the session for swiping."""
    container: AppContainer = get_container(request)
    count = await container.session_service.start(session_id, user.id)
    return {"data": {"restaurant_count": count}}


@router.get("/{session_id}/restaurants")
async def restaurants(
    session_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Return the session's restaurants, best rated first."""
    container: AppContainer = get_container(request)
    candidates = container.session_service.list_candidates(session_id, user.id)
    return {"data": [serialize_candidate(c) for c in candidates]}


@router.post("/{session_id}/swipe")
async def swipe(
    session_id: UUID,
    body: SwipeRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Record the caller's verdict on a restaurant."""
    container: AppContainer = get_container(request)
    outcome = await container.swipe_service.record_swipe(
        session_id, user.id, body.restaurant_id, body.liked
    )
    return {"data": serialize_swipe_outcome(outcome)}


@router.get("/{session_id}/results")
async def results(
    session_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Return matches and swipe progress."""
    container: AppContainer = get_container(request)
    projection = container.results_service.results(session_id, user.id)
    return {"data": serialize_results(projection)}
