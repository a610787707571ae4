"""Supabase Auth identity adapter."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import AuthError, Client

from bitebuddy.domain.models import AuthenticatedUser


class IdentityProvider(Protocol):
    """Resolves bearer tokens to caller identities."""

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Return the user for a token, or None when it is rejected."""


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Supabase Auth."""

    client: Client

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Validate the access token with Supabase Auth."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            return None
        if response is None or response.user is None:
            return None
        user = response.user
        return AuthenticatedUser(
            id=UUID(str(user.id)),
            email=user.email,
            metadata=dict(user.user_metadata or {}),
        )
