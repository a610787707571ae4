"""Friend requests and friend lists."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from bitebuddy.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from bitebuddy.domain.friends import (
    ACCEPTED,
    DECLINED,
    PENDING,
    Friendship,
    FriendWithProfile,
)
from bitebuddy.services.profiles import ProfileRepository

_ACTIONS = {"accept": ACCEPTED, "decline": DECLINED}


class FriendshipRepository(Protocol):
    """Persistence interface for friendships."""

    def get_friendship(self, friendship_id: UUID) -> Friendship | None:
        """Return a friendship by id, if present."""

    def find_between(self, user_a: UUID, user_b: UUID) -> Friendship | None:
        """Return the friendship between two users in either direction."""

    def create_friendship(self, requester_id: UUID, addressee_id: UUID) -> Friendship:
        """Create a pending friendship and return it."""

    def update_status(self, friendship_id: UUID, status: str) -> Friendship:
        """Set a friendship status and return the updated row."""

    def list_for_user(self, user_id: UUID, status: str) -> list[Friendship]:
        """Return friendships in a status where the user is either party."""

    def list_incoming(self, user_id: UUID, status: str) -> list[Friendship]:
        """Return friendships addressed to the user."""

    def list_outgoing(self, user_id: UUID, status: str) -> list[Friendship]:
        """Return friendships requested by the user."""


@dataclass
class FriendService:
    """Application service for the friend graph."""

    repository: FriendshipRepository
    profile_repository: ProfileRepository

    def send_request(self, user_id: UUID, username: str | None) -> Friendship:
        """Send a friend request to the user with the given username."""
        if not username or not username.strip():
            raise ValidationError("Username is required")
        target = self.profile_repository.get_by_username(username.strip())
        if target is None:
            raise NotFoundError("User not found")
        if target.id == user_id:
            raise ValidationError("Cannot send friend request to yourself")
        existing = self.repository.find_between(user_id, target.id)
        if existing:
            raise ConflictError(f"Friend request already {existing.status}")
        return self.repository.create_friendship(user_id, target.id)

    def respond(
        self, user_id: UUID, friendship_id: UUID | None, action: str | None
    ) -> Friendship:
        """Accept or decline a pending request addressed to the user."""
        if friendship_id is None or not action:
            raise ValidationError("friendship_id and action are required")
        new_status = _ACTIONS.get(action)
        if new_status is None:
            raise ValidationError("Action must be accept or decline")
        friendship = self.repository.get_friendship(friendship_id)
        if friendship is None:
            raise NotFoundError("Friend request not found")
        if friendship.addressee_id != user_id:
            raise AuthorizationError("Only the recipient can respond to a request")
        if friendship.status != PENDING:
            raise ConflictError(f"Friend request already {friendship.status}")
        return self.repository.update_status(friendship_id, new_status)

    def list_friends(self, user_id: UUID) -> list[FriendWithProfile]:
        """Return accepted friendships with the friend's profile."""
        friendships = self.repository.list_for_user(user_id, ACCEPTED)
        return self._with_profiles(
            friendships,
            lambda f: f.addressee_id if f.requester_id == user_id else f.requester_id,
        )

    def list_incoming(self, user_id: UUID) -> list[FriendWithProfile]:
        """Return pending requests sent to the user with the sender's profile."""
        friendships = self.repository.list_incoming(user_id, PENDING)
        return self._with_profiles(friendships, lambda f: f.requester_id)

    def list_outgoing(self, user_id: UUID) -> list[FriendWithProfile]:
        """Return pending requests sent by the user with the recipient's profile."""
        friendships = self.repository.list_outgoing(user_id, PENDING)
        return self._with_profiles(friendships, lambda f: f.addressee_id)

    def _with_profiles(
        self,
        friendships: list[Friendship],
        other_party: Callable[[Friendship], UUID],
    ) -> list[FriendWithProfile]:
        if not friendships:
            return []
        other_ids = [other_party(f) for f in friendships]
        profiles = {
            profile.id: profile
            for profile in self.profile_repository.list_profiles(other_ids)
        }
        return [
            FriendWithProfile(friendship=f, profile=profiles.get(other_party(f)))
            for f in friendships
        ]
