"""Pricing tables, city lookups and fare estimation."""
from __future__ import annotations

import logging
import math
import os
import random
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Tuple, TypeVar

from holiday_planner.data.cities import (
    AIRPORT_CODES,
    BASELINE_COST_INDEX,
    CITY_COORDINATES,
    COST_OF_LIVING_INDEX,
    DEFAULT_CITY,
    UNKNOWN_AIRPORT_CODE,
)
from holiday_planner.schemas import CabinClass, FlightPriceBand

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

T = TypeVar("T")

BASE_FLIGHT_PRICE: Mapping[str, int] = {"economy": 320, "business": 650, "first": 1200}

# Prices for a city at the baseline cost-of-living index.
MEAL_BASE_PRICES: Mapping[str, int] = {"breakfast": 15, "lunch": 25, "dinner": 40}
HOTEL_BASE_NIGHTLY_RATE = 120
CAR_BASE_DAILY_RATE = 50

# First match wins, so order matters ("cultural" also appears in museum kinds).
ATTRACTION_CATEGORY_BANDS: Tuple[Tuple[Tuple[str, ...], Tuple[int, int]], ...] = (
    (("museum",), (15, 30)),
    (("historic", "architecture", "monument"), (10, 25)),
    (("religion", "church", "temple"), (0, 15)),
    (("natural", "park", "garden"), (5, 20)),
    (("entertainment", "theatre", "sport"), (20, 50)),
    (("cultural",), (10, 35)),
)

# (minimum rating, band) checked top-down when no category matched.
RATING_PRICE_BANDS: Tuple[Tuple[float, Tuple[int, int]], ...] = (
    (7.0, (20, 45)),
    (5.0, (12, 30)),
    (3.0, (8, 20)),
)
LOW_RATING_BAND: Tuple[int, int] = (0, 15)
DEFAULT_ATTRACTION_RATING = 7.0

EARTH_RADIUS_KM = 6371.0
PER_KM_RATE = 0.15
CABIN_RATE_FACTOR: Mapping[str, float] = {"economy": 1.0, "business": 3.5, "first": 5.5}
MINIMUM_FARE: Mapping[str, int] = {"economy": 50, "business": 200, "first": 400}
FARE_VARIANCE = 0.25

_IATA_SUFFIX = re.compile(r"\s*\(([A-Za-z]{3})\)\s*$")


def round_currency(value: float) -> int:
    """Round half-up to a whole currency unit."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def normalize_city_name(city: str) -> str:
    """Strip ``" (IATA)"`` and ``", Country"`` decorations from a city label."""
    name = _IATA_SUFFIX.sub("", city or "").strip()
    if "," in name:
        name = name.split(",")[0].strip()
    return name


def embedded_airport_code(city: str) -> Optional[str]:
    match = _IATA_SUFFIX.search(city or "")
    return match.group(1).upper() if match else None


def _lookup(table: Mapping[str, T], city: str) -> Optional[T]:
    name = normalize_city_name(city)
    if name in table:
        return table[name]
    lowered = name.lower()
    for key, value in table.items():
        if key.lower() == lowered:
            return value
    return None


def cost_multiplier(city: str) -> float:
    index = _lookup(COST_OF_LIVING_INDEX, city)
    if index is None:
        return 1.0
    return index / BASELINE_COST_INDEX


def airport_code(city: str) -> str:
    code = embedded_airport_code(city) or _lookup(AIRPORT_CODES, city)
    return code or UNKNOWN_AIRPORT_CODE


def coordinates(city: str) -> Tuple[float, float]:
    coords = _lookup(CITY_COORDINATES, city)
    if coords is None:
        logger.warning("Coordinates not found for %s, using %s as default", normalize_city_name(city), DEFAULT_CITY)
        return CITY_COORDINATES[DEFAULT_CITY]
    return coords


def flight_price_per_person(cabin_class: CabinClass) -> int:
    return BASE_FLIGHT_PRICE.get(cabin_class, BASE_FLIGHT_PRICE["economy"])


def local_price(base_price: float, multiplier: float) -> int:
    return round_currency(base_price * multiplier)


def meal_price(meal: str, multiplier: float) -> int:
    return local_price(MEAL_BASE_PRICES[meal], multiplier)


def attraction_price_band(category: str | None, rating: float | None) -> Tuple[int, int]:
    """Return the inclusive price band for an attraction.

    The category is matched by substring so provider "kinds" strings such as
    ``"museums,cultural,interesting_places"`` resolve to a band. When nothing
    matches, more highly rated (and so busier) attractions land in a dearer
    band.
    """
    lowered = (category or "").lower()
    for keywords, band in ATTRACTION_CATEGORY_BANDS:
        if any(keyword in lowered for keyword in keywords):
            return band
    score = DEFAULT_ATTRACTION_RATING if rating is None else rating
    for threshold, band in RATING_PRICE_BANDS:
        if score >= threshold:
            return band
    return LOW_RATING_BAND


def attraction_price(category: str | None, rating: float | None, rng: random.Random) -> int:
    low, high = attraction_price_band(category, rating)
    return rng.randint(low, high)


def haversine_km(origin: Tuple[float, float], destination: Tuple[float, float]) -> float:
    lat1, lon1 = origin
    lat2, lon2 = destination
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def seasonal_multiplier(month: int) -> float:
    if month in (6, 7, 8):
        return 1.3
    if month == 12:
        return 1.4
    if month in (4, 5, 9, 10):
        return 1.1
    return 0.9


def estimate_flight_price(
    origin: Tuple[float, float],
    destination: Tuple[float, float],
    cabin_class: CabinClass,
    departure_date: date,
) -> FlightPriceBand:
    """Estimate a one-way fare band from great-circle distance, cabin and season."""
    distance = haversine_km(origin, destination)
    base_price = distance * PER_KM_RATE * CABIN_RATE_FACTOR.get(cabin_class, 1.0)
    base_price = max(base_price, MINIMUM_FARE.get(cabin_class, MINIMUM_FARE["economy"]))
    base_price *= seasonal_multiplier(departure_date.month)
    return FlightPriceBand(
        min=round_currency(base_price * (1 - FARE_VARIANCE)),
        max=round_currency(base_price * (1 + FARE_VARIANCE)),
        average=round_currency(base_price),
        distance_km=round(distance, 1),
    )


def estimate_total_trip_cost(
    flight_price: float,
    nights: int,
    include_hotel: bool,
    include_car_rental: bool,
) -> int:
    """Quick whole-trip figure: round-trip fare plus average lodging and car."""
    total = flight_price * 2
    if include_hotel:
        total += HOTEL_BASE_NIGHTLY_RATE * nights
    if include_car_rental:
        total += CAR_BASE_DAILY_RATE * nights
    return round_currency(total)
