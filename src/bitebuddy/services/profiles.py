"""Profile lifecycle and lookup."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from bitebuddy.domain.errors import NotFoundError, ValidationError
from bitebuddy.domain.models import AuthenticatedUser, Profile

MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT = 20

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return a profile by user id, if present."""

    def get_by_username(self, username: str) -> Profile | None:
        """Return a profile by exact username, if present."""

    def list_profiles(self, user_ids: list[UUID]) -> list[Profile]:
        """Return profiles for the given user ids."""

    def create_profile(
        self, user_id: UUID, username: str, display_name: str
    ) -> Profile:
        """Create a profile row and return it."""

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Update a profile row and return it."""

    def search_profiles(
        self, query: str, exclude_user_id: UUID, limit: int
    ) -> list[Profile]:
        """Return profiles whose username contains the query."""


@dataclass
class ProfileService:
    """Application service for profiles."""

    repository: ProfileRepository

    def ensure_profile(self, user: AuthenticatedUser) -> Profile:
        """Return the caller's profile, creating it on first sight."""
        existing = self.repository.get_profile(user.id)
        if existing:
            return existing
        _logger.info("Creating missing profile for user %s", user.id)
        return self.repository.create_profile(
            user.id,
            username=user.email or str(user.id),
            display_name=_default_display_name(user),
        )

    def get(self, user_id: UUID) -> Profile:
        """Return a profile or raise NotFoundError."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def update(
        self,
        user_id: UUID,
        display_name: str | None = None,
        avatar_url: str | None = None,
    ) -> Profile:
        """Update the caller's own display name and avatar."""
        updates: dict[str, object] = {}
        if display_name is not None:
            if not display_name.strip():
                raise ValidationError("Display name cannot be empty")
            updates["display_name"] = display_name.strip()
        if avatar_url is not None:
            updates["avatar_url"] = avatar_url
        if not updates:
            raise ValidationError("Nothing to update")
        return self.repository.update_profile(user_id, updates)

    def search(self, user_id: UUID, query: str | None) -> list[Profile]:
        """Search other users by username."""
        if not query or len(query.strip()) < MIN_SEARCH_LENGTH:
            raise ValidationError("Search query must be at least 2 characters")
        return self.repository.search_profiles(
            query.strip(), exclude_user_id=user_id, limit=SEARCH_LIMIT
        )


def _default_display_name(user: AuthenticatedUser) -> str:
    for key in ("full_name", "name"):
        value = user.metadata.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    if user.email:
        return user.email.split("@")[0]
    return "User"
