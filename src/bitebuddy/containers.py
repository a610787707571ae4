"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from bitebuddy.adapters.places_client import HttpxPlacesClient
from bitebuddy.adapters.realtime_client import HttpxRealtimeClient
from bitebuddy.adapters.supabase_friendship_repository import (
    SupabaseFriendshipRepository,
)
from bitebuddy.adapters.supabase_identity import (
    IdentityProvider,
    SupabaseIdentityProvider,
)
from bitebuddy.adapters.supabase_match_repository import SupabaseMatchRepository
from bitebuddy.adapters.supabase_profile_repository import SupabaseProfileRepository
from bitebuddy.adapters.supabase_session_repository import SupabaseSessionRepository
from bitebuddy.adapters.supabase_swipe_repository import SupabaseSwipeRepository
from bitebuddy.config import Settings
from bitebuddy.services.cache import InMemoryCache
from bitebuddy.services.friends import FriendService
from bitebuddy.services.matches import MatchDeriver
from bitebuddy.services.notifications import NotificationService
from bitebuddy.services.places import PlacesService
from bitebuddy.services.profiles import ProfileService
from bitebuddy.services.results import ResultsService
from bitebuddy.services.sessions import SessionService
from bitebuddy.services.swipes import SwipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_provider: IdentityProvider
    profile_service: ProfileService
    friend_service: FriendService
    places_service: PlacesService
    session_service: SessionService
    swipe_service: SwipeService
    results_service: ResultsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    friendship_repository = SupabaseFriendshipRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    swipe_repository = SupabaseSwipeRepository(supabase_client)
    match_repository = SupabaseMatchRepository(supabase_client)

    places_client = HttpxPlacesClient.create(
        api_key=resolved_settings.google_places_api_key,
        base_url=resolved_settings.places_base_url,
        timeout_seconds=resolved_settings.places_timeout_seconds,
    )
    realtime_client = HttpxRealtimeClient.create(
        supabase_url=resolved_settings.supabase_url,
        api_key=resolved_settings.supabase_service_key,
    )
    notifications = NotificationService(
        client=realtime_client if resolved_settings.realtime_enabled else None
    )
    places_service = PlacesService(
        client=places_client,
        cache=InMemoryCache(),
        discover_ttl_seconds=resolved_settings.discover_cache_ttl_seconds,
    )
    session_service = SessionService(
        repository=session_repository,
        swipe_counter=swipe_repository,
        match_repository=match_repository,
        profile_repository=profile_repository,
        places_service=places_service,
        notifications=notifications,
    )
    swipe_service = SwipeService(
        repository=swipe_repository,
        session_repository=session_repository,
        match_deriver=MatchDeriver(repository=match_repository),
        notifications=notifications,
    )

    async def close_resources() -> None:
        await places_client.close()
        await realtime_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_provider=SupabaseIdentityProvider(supabase_client),
        profile_service=ProfileService(profile_repository),
        friend_service=FriendService(
            repository=friendship_repository,
            profile_repository=profile_repository,
        ),
        places_service=places_service,
        session_service=session_service,
        swipe_service=swipe_service,
        results_service=ResultsService(
            session_repository=session_repository,
            swipe_repository=swipe_repository,
            match_repository=match_repository,
        ),
        close_resources=close_resources,
    )
