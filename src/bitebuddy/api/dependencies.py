"""Shared FastAPI dependencies."""

from fastapi import Header, Request

from bitebuddy.containers import AppContainer
from bitebuddy.domain.errors import AuthenticationError
from bitebuddy.domain.models import AuthenticatedUser

_BEARER_PREFIX = "Bearer "


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> AuthenticatedUser:
    """Resolve the bearer token to a user and make sure a profile exists."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise AuthenticationError("Missing authorization")
    token = authorization[len(_BEARER_PREFIX) :].strip()
    container = get_container(request)
    user = container.identity_provider.get_user(token) if token else None
    if user is None:
        raise AuthenticationError("Invalid token")
    container.profile_service.ensure_profile(user)
    return user
