"""Domain models for friendships."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from bitebuddy.domain.models import Profile

PENDING = "pending"
ACCEPTED = "accepted"
DECLINED = "declined"


@dataclass(frozen=True)
class Friendship:
    """Directed friend request between two users."""

    id: UUID
    requester_id: UUID
    addressee_id: UUID
    status: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class FriendWithProfile:
    """Friendship paired with the other party's profile."""

    friendship: Friendship
    profile: Profile | None
