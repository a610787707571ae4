"""Request bodies accepted by the API.

Fields are optional so missing values reach the services, which own the
validation messages.
"""

from uuid import UUID

from pydantic import BaseModel


class CreateSessionRequest(BaseModel):
    """Body for creating a session."""

    name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    radius_meters: int | None = None
    price_filter: list[str] | None = None
    category_filter: str | None = None


class InviteFriendsRequest(BaseModel):
    """Body for inviting users to a session."""

    user_ids: list[UUID] | None = None


class SwipeRequest(BaseModel):
    """Body for recording a swipe."""

    restaurant_id: UUID | None = None
    liked: bool | None = None


class FriendRequestPayload(BaseModel):
    """Body for sending a friend request."""

    username: str | None = None


class FriendRespondPayload(BaseModel):
    """Body for answering a friend request."""

    friendship_id: UUID | None = None
    action: str | None = None


class UpdateProfileRequest(BaseModel):
    """Body for updating the caller's profile."""

    display_name: str | None = None
    avatar_url: str | None = None
