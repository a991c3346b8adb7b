from typing import Optional
import os

import httpx

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

class PexelsClient:
    """Photo lookup backed by the Pexels search API."""
    SEARCH_ENDPOINT = "https://api.pexels.com/v1/search"

    def __init__(self, *, api_key: Optional[str] = None, timeout: float = 10.0):
        self.api_key = api_key or os.getenv("PEXELS_API_KEY")
        self.timeout = timeout

    async def find_photo(self, subject: str, city: Optional[str] = None) -> Optional[str]:
        if not self.api_key:
            return None

        query = f"{subject} {city}" if city else subject
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                self.SEARCH_ENDPOINT,
                params={"query": query, "per_page": 5, "page": 1},
                headers={"Authorization": self.api_key},
            )
            response.raise_for_status()
            data = response.json()

        photos = data.get("photos") or []
        if not photos:
            logger.warning("No images found for: %s", query)
            return None
        src = photos[0].get("src") or {}
        return src.get("medium") or src.get("large")
