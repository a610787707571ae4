"""Restaurant browsing outside of sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from bitebuddy.api.dependencies import get_container, require_user
from bitebuddy.api.serializers import serialize_place
from bitebuddy.domain.errors import ValidationError
from bitebuddy.domain.models import AuthenticatedUser  # noqa: TC001
from bitebuddy.domain.sessions import DEFAULT_RADIUS_METERS

if TYPE_CHECKING:
    from bitebuddy.containers import AppContainer

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("/discover")
async def discover(  # noqa: PLR0913
    request: Request,
    latitude: str | None = None,
    longitude: str | None = None,
    cuisine: str | None = None,
    radius: str | None = None,
    user: AuthenticatedUser = Depends(require_user),  # noqa: ARG001
) -> dict[str, object]:
    """Browse nearby restaurants by cuisine."""
    if not latitude or not longitude:
        raise ValidationError("latitude and longitude are required")
    try:
        lat = float(latitude)
        lng = float(longitude)
        search_radius = float(radius) if radius else float(DEFAULT_RADIUS_METERS)
    except ValueError as exc:
        raise ValidationError("latitude, longitude and radius must be numbers") from exc
    if search_radius <= 0:
        raise ValidationError("radius must be positive")

    container: AppContainer = get_container(request)
    places = await container.places_service.discover(
        latitude=lat,
        longitude=lng,
        cuisine=cuisine or None,
        radius=search_radius,
    )
    return {"data": [serialize_place(p) for p in places]}
