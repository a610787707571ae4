"""Fire-and-forget realtime notifications."""

import logging
from dataclasses import dataclass
from uuid import UUID

from bitebuddy.adapters.realtime_client import RealtimeClient
from bitebuddy.domain.swipes import Match

_logger = logging.getLogger(__name__)


@dataclass
class NotificationService:
    """Publishes committed session events to subscribed clients.

    Delivery failures are logged and never raised to the caller.
    """

    client: RealtimeClient | None = None

    async def session_started(self, session_id: UUID, restaurant_count: int) -> None:
        """Announce that a session has candidates and is open for swiping."""
        await self._publish(
            session_id, "started", {"restaurant_count": restaurant_count}
        )

    async def members_invited(self, session_id: UUID, user_ids: list[UUID]) -> None:
        """Announce newly invited members."""
        if not user_ids:
            return
        await self._publish(
            session_id, "invited", {"user_ids": [str(u) for u in user_ids]}
        )

    async def match_created(self, match: Match) -> None:
        """Announce a new match."""
        await self._publish(
            match.session_id,
            "match",
            {
                "match_id": str(match.id),
                "restaurant_id": str(match.restaurant_id),
                "matched_at": match.matched_at.isoformat(),
            },
        )

    async def _publish(
        self, session_id: UUID, event: str, payload: dict[str, object]
    ) -> None:
        if self.client is None:
            return
        try:
            await self.client.broadcast(f"session:{session_id}", event, payload)
        except Exception:
            _logger.exception(
                "Failed to publish %s event", event, extra={"session_id": session_id}
            )
