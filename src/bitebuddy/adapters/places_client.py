"""Google Places API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.location",
        "places.rating",
        "places.userRatingCount",
        "places.priceLevel",
        "places.primaryType",
        "places.types",
        "places.photos",
        "places.nationalPhoneNumber",
        "places.googleMapsUri",
    ]
)


class PlacesClient(Protocol):
    """Interface for Google Places API interactions."""

    async def search_nearby(self, body: dict[str, object]) -> dict[str, object]:
        """Run a nearby search and return raw API data."""

    def photo_url(self, photo_name: str, max_width_px: int = 800) -> str:
        """Return a media URL for a place photo resource name."""


@dataclass
class HttpxPlacesClient(PlacesClient):
    """HTTPX-backed Google Places client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxPlacesClient":
        """Create a Places client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_nearby(self, body: dict[str, object]) -> dict[str, object]:
        """Search for places around a point."""
        url = f"{self.base_url}/places:searchNearby"
        response = await self.http_client.post(
            url,
            headers={
                "X-Goog-Api-Key": self.api_key,
                "X-Goog-FieldMask": _FIELD_MASK,
            },
            json=body,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    def photo_url(self, photo_name: str, max_width_px: int = 800) -> str:
        """Build the media URL for a photo."""
        return (
            f"{self.base_url}/{photo_name}/media"
            f"?maxWidthPx={max_width_px}&key={self.api_key}"
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
