from typing import Any, Dict, Iterable, List, Optional
import os

import httpx

from holiday_planner.schemas import Attraction

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

DEFAULT_RADIUS_METERS = 5000
MAX_RATE = 3

class OpenTripMapClient:
    """
    Attraction lookup against the OpenTripMap places API.
    Returns an empty list when no API key is configured.
    """
    RADIUS_ENDPOINT = "https://api.opentripmap.com/0.1/en/places/radius"

    def __init__(self, *, api_key: Optional[str] = None, timeout: float = 10.0, min_rate: int = 2):
        self.api_key = api_key or os.getenv("OPENTRIPMAP_API_KEY")
        self.timeout = timeout
        self.min_rate = min_rate

    async def fetch_attractions(
        self,
        city: str,
        latitude: float,
        longitude: float,
        *,
        limit: int = 15,
        radius: int = DEFAULT_RADIUS_METERS,
    ) -> List[Attraction]:
        """Return up to ``limit`` named attractions around a point.

        Unnamed places are common in the radius feed, so twice the limit is
        requested and the surplus is discarded after filtering. HTTP errors
        propagate; the caller decides how to degrade.
        """
        if not self.api_key:
            logger.info("OPENTRIPMAP_API_KEY not configured; skipping attraction lookup for %s", city)
            return []

        params = {
            "radius": radius,
            "lon": longitude,
            "lat": latitude,
            "limit": limit * 2,
            "rate": self.min_rate,
            "format": "json",
            "apikey": self.api_key,
        }
        logger.info("Fetching attractions for %s using OpenTripMap...", city)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.RADIUS_ENDPOINT, params=params)
            response.raise_for_status()
            data = response.json()

        attractions = self._parse(data, limit)
        logger.info("Found %d attractions for %s", len(attractions), city)
        return attractions

    def _parse(self, data: Any, limit: int) -> List[Attraction]:
        if isinstance(data, dict):
            # geojson flavour of the same endpoint
            records: Iterable[Dict[str, Any]] = [
                feature.get("properties") or {} for feature in data.get("features", [])
            ]
        elif isinstance(data, list):
            records = data
        else:
            return []

        attractions: List[Attraction] = []
        seen: set[str] = set()
        for record in records:
            name = (record.get("name") or "").strip()
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            attractions.append(
                Attraction(
                    name=name,
                    category=record.get("kinds") or "",
                    rating=self._rate_to_rating(record.get("rate")),
                )
            )
            if len(attractions) >= limit:
                break
        return attractions

    @staticmethod
    def _rate_to_rating(rate: Any) -> Optional[float]:
        # rates look like 1, 2, 3 or "3h" (h marks cultural heritage);
        # stretched onto the 0-10 rating scale used for pricing
        if rate is None:
            return None
        digits = "".join(ch for ch in str(rate) if ch.isdigit())
        if not digits:
            return None
        return round(min(float(digits), MAX_RATE) / MAX_RATE * 10, 1)
