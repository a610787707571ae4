"""Restaurant search on top of Google Places."""

import logging
from dataclasses import dataclass

import httpx

from bitebuddy.adapters.places_client import PlacesClient
from bitebuddy.domain.errors import UpstreamError
from bitebuddy.domain.places import (
    CUISINE_TYPES,
    LEVEL_TO_SYMBOL,
    PRICE_TO_LEVEL,
    PlaceBusiness,
)
from bitebuddy.domain.sessions import Category
from bitebuddy.services.cache import Cache

MAX_RADIUS_METERS = 50000
MAX_RESULTS = 20
_GENERIC_TYPES = {"restaurant", "point_of_interest", "establishment", "food"}
_MAX_CATEGORIES = 3

_logger = logging.getLogger(__name__)


def map_price_filter(price_filter: list[str] | None) -> list[str] | None:
    """Map ``$``..``$$$$`` symbols to Places price levels."""
    if not price_filter:
        return None
    levels = [PRICE_TO_LEVEL[p] for p in price_filter if p in PRICE_TO_LEVEL]
    return levels or None


def cuisine_types(cuisine: str | None) -> list[str]:
    """Return the Places types for a cuisine key, defaulting to restaurants."""
    return list(CUISINE_TYPES.get(cuisine or "all", CUISINE_TYPES["all"]))


@dataclass
class PlacesService:
    """Service for nearby restaurant searches."""

    client: PlacesClient
    cache: Cache
    discover_ttl_seconds: int = 600

    async def search_restaurants(  # noqa: PLR0913
        self,
        latitude: float,
        longitude: float,
        radius: float,
        price_levels: list[str] | None = None,
        included_types: list[str] | None = None,
        limit: int = MAX_RESULTS,
    ) -> list[PlaceBusiness]:
        """Search restaurants around a point.

        Transport failures, timeouts, non-2xx responses and malformed bodies
        are raised as UpstreamError. Places without an id are skipped.
        """
        body: dict[str, object] = {
            "includedTypes": included_types or ["restaurant"],
            "maxResultCount": min(limit, MAX_RESULTS),
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": latitude, "longitude": longitude},
                    "radius": min(radius, MAX_RADIUS_METERS),
                }
            },
        }
        if price_levels:
            body["priceLevels"] = price_levels

        try:
            payload = await self.client.search_nearby(body)
        except httpx.TimeoutException as exc:
            _logger.warning("Places search timed out")
            raise UpstreamError("Google Places API timed out") from exc
        except httpx.HTTPStatusError as exc:
            _logger.warning(
                "Places search failed: status=%s", exc.response.status_code
            )
            raise UpstreamError(
                f"Google Places API error {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            _logger.warning("Places search failed: %s", exc)
            raise UpstreamError("Google Places API request failed") from exc
        except ValueError as exc:
            _logger.warning("Places search returned invalid JSON")
            raise UpstreamError("Google Places API returned invalid JSON") from exc

        if not isinstance(payload, dict):
            _logger.warning("Places search returned %s", type(payload).__name__)
            raise UpstreamError("Google Places API returned an unexpected payload")
        places = payload.get("places") or []
        if not isinstance(places, list):
            raise UpstreamError("Google Places API returned an unexpected payload")
        return [
            self._parse_place(place)
            for place in places
            if isinstance(place, dict) and place.get("id")
        ]

    async def discover(
        self,
        latitude: float,
        longitude: float,
        cuisine: str | None = None,
        radius: float = 5000,
    ) -> list[PlaceBusiness]:
        """Browse restaurants by cuisine, cached for a short time."""
        cache_key = f"places:discover:{latitude:.4f}:{longitude:.4f}:{cuisine}:{radius}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        restaurants = await self.search_restaurants(
            latitude=latitude,
            longitude=longitude,
            radius=radius,
            included_types=cuisine_types(cuisine),
        )
        self.cache.set(cache_key, restaurants, ttl_seconds=self.discover_ttl_seconds)
        return restaurants

    def _parse_place(self, place: dict[str, object]) -> PlaceBusiness:
        photos = place.get("photos") or []
        image_url = None
        if isinstance(photos, list) and photos and isinstance(photos[0], dict):
            photo_name = photos[0].get("name")
            if photo_name:
                image_url = self.client.photo_url(str(photo_name))

        display_name = place.get("displayName") or {}
        location = place.get("location") or {}
        rating = place.get("rating")
        return PlaceBusiness(
            id=str(place["id"]),
            name=str(display_name.get("text") or "Unknown"),
            image_url=image_url,
            rating=float(rating) if rating is not None else None,
            review_count=int(place.get("userRatingCount") or 0),
            price=LEVEL_TO_SYMBOL.get(str(place.get("priceLevel"))),
            categories=_categories(place.get("types") or []),
            address=str(place.get("formattedAddress") or ""),
            latitude=float(location.get("latitude") or 0),
            longitude=float(location.get("longitude") or 0),
            phone=str(place.get("nationalPhoneNumber") or ""),
            url=str(place.get("googleMapsUri") or ""),
        )


def _categories(types: list[str]) -> list[Category]:
    specific = [t for t in types if t not in _GENERIC_TYPES][:_MAX_CATEGORIES]
    return [
        Category(alias=t, title=t.replace("_", " ").title()) for t in specific
    ]
