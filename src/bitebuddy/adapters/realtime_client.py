"""Supabase Realtime broadcast adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class RealtimeClient(Protocol):
    """Interface for pushing events to subscribed clients."""

    async def broadcast(
        self, topic: str, event: str, payload: dict[str, object]
    ) -> None:
        """Broadcast an event on a topic."""


@dataclass
class HttpxRealtimeClient(RealtimeClient):
    """Realtime client using the Supabase broadcast REST endpoint."""

    supabase_url: str
    api_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, supabase_url: str, api_key: str) -> "HttpxRealtimeClient":
        """Create a realtime client with a managed httpx session."""
        return cls(
            supabase_url=supabase_url.rstrip("/"),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
        )

    async def broadcast(
        self, topic: str, event: str, payload: dict[str, object]
    ) -> None:
        """Send a single broadcast message."""
        url = f"{self.supabase_url}/realtime/v1/api/broadcast"
        response = await self.http_client.post(
            url,
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
            },
            json={
                "messages": [
                    {"topic": topic, "event": event, "payload": payload},
                ]
            },
            timeout=5,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
