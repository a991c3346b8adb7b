# holiday_planner/llm.py
import os
import json
import logging
from typing import Any, Dict, List

from dotenv import load_dotenv
from openai import OpenAI
from pydantic import ValidationError

from holiday_planner.schemas import Attraction

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

# Load .env file if present
load_dotenv()

api_key = os.getenv("OPENAI_API_KEY")
if api_key:
    _client = OpenAI(api_key=api_key)
else:  # pragma: no cover - exercised indirectly in tests without API key
    _client = None
    logger.info("OPENAI_API_KEY not set; attraction backfill disabled")

DEFAULT_MODEL = os.getenv("HOLIDAY_PLANNER_BACKFILL_MODEL") or "gpt-4o-mini"

ATTRACTION_BACKFILL_SYSTEM = """You are a cautious travel research assistant.
When the attraction database has nothing for a city, suggest well-known places to visit.
Respond ONLY in JSON with the schema:
  {"attractions": [{"name": "", "category": "", "rating": 0, "description": ""}]}
- name: the real, proper name of the place.
- category: one of museum, historic, religion, natural, entertainment, cultural, other.
- rating: popularity from 0 to 10.
- description: one sentence, <=120 characters.
Do not fabricate places, prices or opening hours.
Return fewer entries when uncertain.
"""

ATTRACTION_BACKFILL_TEMPLATE = """List up to {count} attractions worth a visit in {city}.
Prefer places within 5 km of the city centre.
"""


def llm_backfill_attractions(
    city: str,
    count: int,
    *,
    model: str = DEFAULT_MODEL,
) -> List[Attraction]:
    """Use the hosted LLM to suggest attractions when the lookup service has none."""

    if not city or count <= 0:
        return []

    if _client is None:
        logger.info("Skipping LLM attraction backfill for %s (missing client or API key)", city)
        return []

    logger.info("Invoking LLM model %s for attraction backfill (%s, %d places)", model, city, count)
    resp = _client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": ATTRACTION_BACKFILL_SYSTEM},
            {"role": "user", "content": ATTRACTION_BACKFILL_TEMPLATE.format(city=city, count=count)},
        ],
        temperature=0.2,
        response_format={"type": "json_object"},
    )

    raw = resp.choices[0].message.content
    try:
        payload = json.loads(raw or "")
    except ValueError:
        logger.warning("LLM attraction backfill returned non-JSON payload; ignoring", exc_info=True)
        return []

    entries = payload.get("attractions") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return []

    return _normalise_attractions(entries, count)


def _normalise_attractions(entries: List[Any], count: int) -> List[Attraction]:
    attractions: List[Attraction] = []
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        data: Dict[str, Any] = dict(entry)
        rating = data.get("rating")
        if not isinstance(rating, (int, float)) or isinstance(rating, bool):
            data["rating"] = None
        data["category"] = str(data.get("category") or "")
        data.pop("image_url", None)
        try:
            attraction = Attraction.model_validate(data)
        except ValidationError:
            logger.debug("Dropping malformed LLM attraction entry: %s", entry)
            continue
        key = attraction.name.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        attractions.append(attraction)
        if len(attractions) >= count:
            break
    return attractions
