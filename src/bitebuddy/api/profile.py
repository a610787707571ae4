"""Profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from bitebuddy.api.dependencies import get_container, require_user
from bitebuddy.api.schemas import UpdateProfileRequest  # noqa: TC001
from bitebuddy.api.serializers import serialize_profile
from bitebuddy.domain.models import AuthenticatedUser  # noqa: TC001

if TYPE_CHECKING:
    from bitebuddy.containers import AppContainer

router = APIRouter(tags=["profile"])


@router.get("/auth/me")
async def me(
    request: Request, user: AuthenticatedUser = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's profile."""
    container: AppContainer = get_container(request)
    return {"data": serialize_profile(container.profile_service.get(user.id))}


@router.put("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> dict[str, object]:
    """Update the caller's display name or avatar."""
    container: AppContainer = get_container(request)
    profile = container.profile_service.update(
        user.id, display_name=body.display_name, avatar_url=body.avatar_url
    )
    return {"data": serialize_profile(profile)}
