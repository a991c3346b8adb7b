"""Deterministic placeholder content used when enrichment services come up empty."""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from holiday_planner.schemas import Attraction


def _pexels(photo_id: int) -> str:
    return f"https://images.pexels.com/photos/{photo_id}/pexels-photo-{photo_id}.jpeg?auto=compress&cs=tinysrgb&w=800"


TRANSFER_IMAGE = _pexels(3207517)

_FALLBACK_TYPES: Tuple[Dict[str, Sequence], ...] = (
    {
        "category": "museum",
        "names": ("City Museum", "National Museum", "Art Gallery", "History Museum", "Modern Art Museum"),
        "descriptions": (
            "Explore the rich history and culture",
            "Discover fascinating exhibits",
            "Admire world-class art collections",
        ),
        "images": (_pexels(3807517), _pexels(3807516), _pexels(3807515)),
    },
    {
        "category": "historic_site",
        "names": ("Old Town Square", "Historic District", "City Center", "Heritage Site", "Ancient Quarter"),
        "descriptions": (
            "Walk through centuries of history",
            "Experience the city's heritage",
            "Discover architectural wonders",
        ),
        "images": (_pexels(3707517), _pexels(3707516), _pexels(3707515)),
    },
    {
        "category": "park",
        "names": ("Central Park", "City Park", "Botanical Garden", "Riverside Park", "Public Garden"),
        "descriptions": (
            "Relax in beautiful green spaces",
            "Enjoy nature in the heart of the city",
            "Perfect spot for a leisurely stroll",
        ),
        "images": (_pexels(3607517), _pexels(3607516), _pexels(3607515)),
    },
    {
        "category": "shopping",
        "names": ("Shopping District", "Local Market", "Artisan Quarter", "Fashion Street", "Souvenir Market"),
        "descriptions": (
            "Browse local shops and boutiques",
            "Find unique souvenirs and gifts",
            "Experience local shopping culture",
        ),
        "images": (_pexels(3507517), _pexels(3507516), _pexels(3507515)),
    },
    {
        "category": "restaurant",
        "names": ("Local Restaurant", "Traditional Cuisine", "Rooftop Dining", "Waterfront Restaurant", "Gourmet Experience"),
        "descriptions": (
            "Savor authentic local flavors",
            "Enjoy a memorable dining experience",
            "Taste the best of local cuisine",
        ),
        "images": (_pexels(3407517), _pexels(3407516), _pexels(3407515)),
    },
    {
        "category": "cultural",
        "names": ("Cultural Center", "Theater District", "Music Hall", "Performance Venue", "Arts Quarter"),
        "descriptions": (
            "Immerse yourself in local culture",
            "Experience performing arts",
            "Discover cultural traditions",
        ),
        "images": (_pexels(3307517), _pexels(3307516), _pexels(3307515)),
    },
)

# (keywords, images) for attractions whose photo lookup failed.
_CATEGORY_IMAGES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("museum",), (_pexels(3807517), _pexels(3807516), _pexels(3807515))),
    (("historic", "architecture", "monument"), (_pexels(3707517), _pexels(3707516), _pexels(3707515))),
    (("religion", "church", "temple"), (_pexels(3607517), _pexels(3607516), _pexels(3607515))),
    (("natural", "park", "garden"), (_pexels(3507517), _pexels(3507516), _pexels(3507515))),
    (("entertainment", "theatre", "cultural"), (_pexels(3407517), _pexels(3407516), _pexels(3407515))),
)
_DEFAULT_IMAGES: Tuple[str, ...] = tuple(_pexels(photo_id) for photo_id in range(3307517, 3307511, -1))
_MEAL_IMAGES: Tuple[str, ...] = tuple(_pexels(photo_id) for photo_id in range(3407517, 3407511, -1))


def fallback_attractions(city: str, count: int, *, offset: int = 0) -> List[Attraction]:
    """Return ``count`` generic attractions for ``city``.

    Entries rotate through the place types, so consecutive calls with
    increasing ``offset`` keep producing different places.
    """
    attractions: List[Attraction] = []
    for i in range(offset, offset + count):
        kind = _FALLBACK_TYPES[i % len(_FALLBACK_TYPES)]
        names = kind["names"]
        name = names[(i // len(_FALLBACK_TYPES)) % len(names)]
        descriptions = kind["descriptions"]
        images = kind["images"]
        attractions.append(
            Attraction(
                name=f"{name} of {city}",
                category=kind["category"],
                rating=float(6 + i % 3),
                description=descriptions[i % len(descriptions)],
                image_url=images[i % len(images)],
            )
        )
    return attractions


def category_fallback_image(category: str | None, index: int) -> str:
    lowered = (category or "").lower()
    for keywords, images in _CATEGORY_IMAGES:
        if any(keyword in lowered for keyword in keywords):
            return images[index % len(images)]
    return _DEFAULT_IMAGES[index % len(_DEFAULT_IMAGES)]


def meal_image(day_index: int) -> str:
    return _MEAL_IMAGES[day_index % len(_MEAL_IMAGES)]
