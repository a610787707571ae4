"""Domain models for the places search collaborator."""

from dataclasses import dataclass, field

from bitebuddy.domain.sessions import Category

PRICE_TO_LEVEL = {
    "$": "PRICE_LEVEL_INEXPENSIVE",
    "$$": "PRICE_LEVEL_MODERATE",
    "$$$": "PRICE_LEVEL_EXPENSIVE",
    "$$$$": "PRICE_LEVEL_VERY_EXPENSIVE",
}

LEVEL_TO_SYMBOL = {
    "PRICE_LEVEL_FREE": "Free",
    "PRICE_LEVEL_INEXPENSIVE": "$",
    "PRICE_LEVEL_MODERATE": "$$",
    "PRICE_LEVEL_EXPENSIVE": "$$$",
    "PRICE_LEVEL_VERY_EXPENSIVE": "$$$$",
}

CUISINE_TYPES: dict[str, tuple[str, ...]] = {
    "all": ("restaurant",),
    "italian": ("italian_restaurant",),
    "mexican": ("mexican_restaurant",),
    "japanese": ("japanese_restaurant",),
    "chinese": ("chinese_restaurant",),
    "thai": ("thai_restaurant",),
    "indian": ("indian_restaurant",),
    "american": ("american_restaurant",),
    "pizza": ("pizza_restaurant",),
    "seafood": ("seafood_restaurant",),
    "korean": ("korean_restaurant",),
    "burgers": ("hamburger_restaurant",),
    "coffee": ("coffee_shop", "cafe"),
}


@dataclass(frozen=True)
class PlaceBusiness:
    """Restaurant returned by the places search."""

    id: str
    name: str
    image_url: str | None
    rating: float | None
    review_count: int
    price: str | None
    categories: list[Category] = field(default_factory=list)
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    phone: str = ""
    url: str = ""
