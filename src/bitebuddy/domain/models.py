"""Domain models for users and profiles."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity supplied by the auth backend."""

    id: UUID
    email: str | None
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Profile:
    """Public profile of a user."""

    id: UUID
    username: str
    display_name: str
    avatar_url: str | None
    created_at: datetime | None = None
