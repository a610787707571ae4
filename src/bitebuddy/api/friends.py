"""Friend graph endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request, status

from bitebuddy.api.dependencies import get_container, require_user
from bitebuddy.api.schemas import (  # noqa: TC001
    FriendRequestPayload,
    FriendRespondPayload,
)
from bitebuddy.api.serializers import (
    serialize_friend,
    serialize_friendship,
    serialize_profile,
)
from bitebuddy.domain.models import AuthenticatedUser  # noqa: TC001

if TYPE_CHECKING:
    from bitebuddy.containers import AppContainer

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get("")
async def list_friends(
    request: Request, user: AuthenticatedUser = Depends(require_user)
) -> dict[str, object]:
    """Return accepted friends."""
    container: AppContainer = get_container(request)
    friends = container.friend_service.list_friends(user.id)
    return {"data": [serialize_friend(f) for f in friends]}


@router.get("/search")
async def search(
    request: Request,
    q: str | None = Query(default=None),
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Search users by username."""
    container: AppContainer = get_container(request)
    profiles = container.profile_service.search(user.id, q)
    return {"data": [serialize_profile(p) for p in profiles]}


@router.post("/request", status_code=status.HTTP_201_CREATED)
async def send_request(
    body: FriendRequestPayload,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Send a friend request by username."""
    container: AppContainer = get_container(request)
    friendship = container.friend_service.send_request(user.id, body.username)
    return {"data": serialize_friendship(friendship)}


@router.get("/requests")
async def incoming_requests(
    request: Request, user: AuthenticatedUser = Depends(require_user)
) -> dict[str, object]:
    """Return pending requests addressed to the caller."""
    container: AppContainer = get_container(request)
    friends = container.friend_service.list_incoming(user.id)
    return {"data": [serialize_friend(f) for f in friends]}


@router.get("/requests/sent")
async def outgoing_requests(
    request: Request, user: AuthenticatedUser = Depends(require_user)
) -> dict[str, object]:
    """Return pending requests the caller sent."""
    container: AppContainer = get_container(request)
    friends = container.friend_service.list_outgoing(user.id)
    return {"data": [serialize_friend(f) for f in friends]}


@router.post("/respond")
async def respond(
    body: FriendRespondPayload,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Accept or decline a pending request."""
    container: AppContainer = get_container(request)
    friendship = container.friend_service.respond(
        user.id, body.friendship_id, body.action
    )
    return {"data": serialize_friendship(friendship)}
