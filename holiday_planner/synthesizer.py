# holiday_planner/synthesizer.py
from __future__ import annotations

import asyncio
import logging
import math
import os
import random
from datetime import date
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Protocol, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from holiday_planner import pricing
from holiday_planner.catalog import TRANSFER_IMAGE, category_fallback_image, fallback_attractions, meal_image
from holiday_planner.costing import compute_total_cost
from holiday_planner.foundation import TripFoundation, extract_foundation
from holiday_planner.llm import llm_backfill_attractions
from holiday_planner.schemas import (
    Attraction,
    CarRental,
    DayPlan,
    Flight,
    Hotel,
    ItineraryItem,
    TripDetails,
    TripPlan,
)
from holiday_planner.tools.opentripmap import DEFAULT_RADIUS_METERS, OpenTripMapClient
from holiday_planner.tools.pexels import PexelsClient

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

T = TypeVar("T")


def _env_number(name: str, default: float) -> float:
    """Read a positive, finite number from the environment, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r; using %s", name, raw, default)
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring %s=%r; expected a positive number, using %s", name, raw, default)
        return default
    return value


DEFAULT_LOOKUP_TIMEOUT = _env_number("HOLIDAY_PLANNER_LOOKUP_TIMEOUT", 8.0)
DEFAULT_PHOTO_CONCURRENCY = int(_env_number("HOLIDAY_PLANNER_PHOTO_CONCURRENCY", 6))

ATTRACTIONS_PER_DAY = 3
MAX_ATTRACTIONS = 20
FIRST_ATTRACTION_HOUR = 10
ATTRACTION_SPACING_HOURS = 3

MEAL_SCHEDULE = (
    ("breakfast", "08:00", "Breakfast", "Start your day with a delicious local breakfast"),
    ("lunch", "12:00", "Lunch", "Enjoy a memorable dining experience"),
    ("dinner", "19:00", "Dinner", "Savor authentic local flavors"),
)

AIRLINE = "SkyWings Airlines"
FLIGHT_DURATION = "3h 30m"
OUTBOUND_SCHEDULE = ("SW 1247", "09:15", "12:45")
RETURN_SCHEDULE = ("SW 1248", "18:30", "22:00")
ARRIVAL_TRANSFER_TIME = OUTBOUND_SCHEDULE[2]
DEPARTURE_TRANSFER_TIME = "16:00"

HOTEL_RATING = 4.5
HOTEL_AMENITIES = ("Free WiFi", "Pool", "Gym", "Restaurant")


class AttractionProvider(Protocol):
    async def fetch_attractions(
        self,
        city: str,
        latitude: float,
        longitude: float,
        *,
        limit: int,
        radius: int,
    ) -> List[Attraction]: ...


class PhotoProvider(Protocol):
    async def find_photo(self, subject: str, city: Optional[str] = None) -> Optional[str]: ...


AttractionBackfill = Callable[[str, int], List[Attraction]]


class ItinerarySynthesizer:
    """Builds a complete, priced trip plan from trip details.

    Pricing is local: static city tables and price bands. Attractions and
    photos come from the injected providers, and every call to them is
    bounded by ``call_timeout``. A failing, slow or empty provider is logged
    and replaced with catalog content, so ``synthesize`` always returns a
    full plan.
    """

    def __init__(
        self,
        attractions: AttractionProvider | None = None,
        photos: PhotoProvider | None = None,
        *,
        backfill: AttractionBackfill | None = llm_backfill_attractions,
        rng: random.Random | None = None,
        call_timeout: float | None = None,
        max_concurrency: int | None = None,
    ):
        self.attractions = attractions if attractions is not None else OpenTripMapClient()
        self.photos = photos if photos is not None else PexelsClient()
        self.backfill = backfill
        self.rng = rng or random.Random()
        self.call_timeout = call_timeout if call_timeout is not None else DEFAULT_LOOKUP_TIMEOUT
        self.max_concurrency = max(1, max_concurrency or DEFAULT_PHOTO_CONCURRENCY)

    async def synthesize(self, details: TripDetails) -> TripPlan:
        foundation = extract_foundation(details)
        city = foundation.destination_name
        multiplier = pricing.cost_multiplier(details.destination_city)

        logger.info(
            "Synthesizing %d-day trip for %d priced passenger(s) from %s to %s (%s, multiplier %.2f)",
            foundation.trip_days,
            foundation.priced_passengers,
            foundation.origin_name,
            city,
            details.cabin_class,
            multiplier,
        )
        if foundation.dates_defaulted:
            logger.info(
                "Trip dates defaulted to %s -> %s",
                foundation.departure_date.isoformat(),
                foundation.return_date.isoformat(),
            )

        limit = min(foundation.trip_days * ATTRACTIONS_PER_DAY, MAX_ATTRACTIONS)
        attractions = await self._gather_attractions(details.destination_city, city, limit)
        attractions = await self._attach_photos(attractions, city)

        itinerary = [
            self._build_day(day, on_date, foundation, attractions, multiplier)
            for day, on_date in enumerate(foundation.calendar, start=1)
        ]

        origin_code = details.departure_code or pricing.airport_code(details.departure_city)
        destination_code = details.destination_code or pricing.airport_code(details.destination_city)
        price_per_person = self._flight_price(details, foundation)

        plan = TripPlan(
            outbound_flight=self._flight(
                "outbound-1",
                OUTBOUND_SCHEDULE,
                (foundation.origin_name, origin_code),
                (city, destination_code),
                details,
                price_per_person,
                foundation.priced_passengers,
            ),
            return_flight=self._flight(
                "return-1",
                RETURN_SCHEDULE,
                (city, destination_code),
                (foundation.origin_name, origin_code),
                details,
                price_per_person,
                foundation.priced_passengers,
            ),
            hotel=self._hotel(foundation, multiplier) if details.include_hotel else None,
            car_rental=self._car_rental(foundation, multiplier) if details.include_car_rental else None,
            itinerary=itinerary,
            trip_days=foundation.trip_days,
            priced_passengers=foundation.priced_passengers,
            headcount=foundation.headcount,
            cost_multiplier=round(multiplier, 3),
        )
        plan.total_cost = compute_total_cost(plan)
        logger.info(
            "Synthesized plan for %s: %d day(s), %d item(s), total %d %s",
            city,
            len(plan.itinerary),
            sum(len(day.items) for day in plan.itinerary),
            plan.total_cost,
            plan.currency,
        )
        return plan

    # ---------- enrichment ----------
    async def _guarded(self, awaitable: Awaitable[T], *, default: T, label: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.call_timeout)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs; using fallback", label, self.call_timeout)
        except Exception:
            logger.warning("%s failed; using fallback", label, exc_info=True)
        return default

    async def _gather_attractions(self, destination: str, city: str, limit: int) -> List[Attraction]:
        latitude, longitude = pricing.coordinates(destination)
        found = await self._guarded(
            self.attractions.fetch_attractions(
                city, latitude, longitude, limit=limit, radius=DEFAULT_RADIUS_METERS
            ),
            default=[],
            label=f"Attraction lookup for {city}",
        )
        attractions = _coerce_attractions(found)[:limit]

        if not attractions and self.backfill is not None:
            backfilled = await self._guarded(
                asyncio.to_thread(self.backfill, city, limit),
                default=[],
                label=f"Attraction backfill for {city}",
            )
            attractions = _coerce_attractions(backfilled)[:limit]
            if attractions:
                logger.info("Backfill supplied %d attraction(s) for %s", len(attractions), city)

        if not attractions:
            logger.info("No attractions available for %s, using fallback attractions", city)
        return attractions

    async def _attach_photos(self, attractions: List[Attraction], city: str) -> List[Attraction]:
        if not attractions:
            return []
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def lookup(attraction: Attraction) -> Optional[str]:
            async with semaphore:
                return await self._guarded(
                    self.photos.find_photo(attraction.name, city),
                    default=None,
                    label=f"Photo lookup for {attraction.name}",
                )

        urls = await asyncio.gather(*(lookup(attraction) for attraction in attractions))
        return [
            attraction.model_copy(
                update={"image_url": url or attraction.image_url or category_fallback_image(attraction.category, index)}
            )
            for index, (attraction, url) in enumerate(zip(attractions, urls))
        ]

    # ---------- day assembly ----------
    def _build_day(
        self,
        day: int,
        on_date: date,
        foundation: TripFoundation,
        attractions: List[Attraction],
        multiplier: float,
    ) -> DayPlan:
        city = foundation.destination_name
        passengers = foundation.priced_passengers
        items: List[ItineraryItem] = []

        if day == 1:
            items.append(
                _transfer(
                    f"day{day}-arrival",
                    f"Arrival at {city} Airport",
                    f"Welcome to {city}! Collect your luggage and proceed to your accommodation.",
                    ARRIVAL_TRANSFER_TIME,
                )
            )

        for meal, time_of_day, label, description in MEAL_SCHEDULE:
            per_person = pricing.meal_price(meal, multiplier)
            items.append(
                ItineraryItem(
                    id=f"day{day}-{meal}",
                    title=f"{label} at {city}",
                    description=description,
                    time=time_of_day,
                    type="meal",
                    cost_per_person=per_person,
                    cost=pricing.round_currency(per_person * passengers),
                    image_url=meal_image(day - 1),
                )
            )

        start = (day - 1) * ATTRACTIONS_PER_DAY
        todays = attractions[start:start + ATTRACTIONS_PER_DAY]
        if not todays:
            todays = fallback_attractions(city, ATTRACTIONS_PER_DAY, offset=start)

        for idx, attraction in enumerate(todays):
            hour = FIRST_ATTRACTION_HOUR + idx * ATTRACTION_SPACING_HOURS
            per_person = pricing.attraction_price(attraction.category, attraction.rating, self.rng)
            items.append(
                ItineraryItem(
                    id=f"day{day}-attraction{idx}",
                    title=attraction.name,
                    description=attraction.description or f"Explore this {_category_label(attraction.category)} in {city}",
                    time=f"{hour:02d}:00",
                    type="attraction",
                    cost_per_person=per_person,
                    cost=pricing.round_currency(per_person * passengers),
                    image_url=attraction.image_url or category_fallback_image(attraction.category, start + idx),
                    google_maps_url=_maps_url(attraction.name, city),
                    duration="2h",
                    distance="2.5 km" if idx > 0 else None,
                )
            )

        if day == foundation.trip_days:
            items.append(
                _transfer(
                    f"day{day}-departure",
                    f"Return to {city} Airport",
                    "Check out and head to the airport for your return flight.",
                    DEPARTURE_TRANSFER_TIME,
                )
            )

        items.sort(key=lambda item: _minutes(item.time))
        return DayPlan(day=day, date=on_date, label=f"{on_date:%a, %b} {on_date.day}", items=items)

    # ---------- bookables ----------
    def _flight_price(self, details: TripDetails, foundation: TripFoundation) -> int:
        if details.pricing_strategy == "distance":
            band = pricing.estimate_flight_price(
                pricing.coordinates(details.departure_city),
                pricing.coordinates(details.destination_city),
                details.cabin_class,
                foundation.departure_date,
            )
            logger.debug("Distance fare band %s-%s (avg %s) over %.0f km", band.min, band.max, band.average, band.distance_km or 0)
            return band.average
        return pricing.flight_price_per_person(details.cabin_class)

    @staticmethod
    def _flight(
        flight_id: str,
        schedule: tuple[str, str, str],
        origin: tuple[str, str],
        destination: tuple[str, str],
        details: TripDetails,
        price_per_person: int,
        passengers: int,
    ) -> Flight:
        number, departs, arrives = schedule
        return Flight(
            id=flight_id,
            airline=AIRLINE,
            flight_number=number,
            origin=origin[0],
            origin_code=origin[1],
            destination=destination[0],
            destination_code=destination[1],
            departure_time=departs,
            arrival_time=arrives,
            duration=FLIGHT_DURATION,
            cabin_class=details.cabin_class,
            price_per_person=price_per_person,
            cost=pricing.round_currency(price_per_person * passengers),
        )

    @staticmethod
    def _hotel(foundation: TripFoundation, multiplier: float) -> Hotel:
        city = foundation.destination_name
        nightly = pricing.local_price(pricing.HOTEL_BASE_NIGHTLY_RATE, multiplier)
        return Hotel(
            id="hotel-1",
            name=f"Grand {city} Palace Hotel",
            rating=HOTEL_RATING,
            address=f"123 Central Avenue, {city}",
            distance_from_airport="18 km from airport",
            price_per_night=nightly,
            nights=foundation.nights,
            total_price=nightly * foundation.nights,
            amenities=list(HOTEL_AMENITIES),
        )

    @staticmethod
    def _car_rental(foundation: TripFoundation, multiplier: float) -> CarRental:
        city = foundation.destination_name
        daily = pricing.local_price(pricing.CAR_BASE_DAILY_RATE, multiplier)
        rental_days = max(1, foundation.nights)
        return CarRental(
            id="car-1",
            company="EuroMobility",
            vehicle_type="Compact",
            vehicle_name="Volkswagen Tiguan or similar",
            pickup_location=f"{city} Airport",
            dropoff_location=f"{city} Airport",
            pickup_time=f"{foundation.departure_date.isoformat()} {ARRIVAL_TRANSFER_TIME}",
            dropoff_time=f"{foundation.return_date.isoformat()} {DEPARTURE_TRANSFER_TIME}",
            price_per_day=daily,
            rental_days=rental_days,
            total_price=daily * rental_days,
        )


async def synthesize_trip(details: TripDetails, *, seed: int | None = None, **kwargs: Any) -> TripPlan:
    """Synthesize a plan with the default providers; ``seed`` fixes attraction prices."""
    synthesizer = ItinerarySynthesizer(rng=random.Random(seed), **kwargs)
    return await synthesizer.synthesize(details)


# ---------- helpers ----------
def _transfer(item_id: str, title: str, description: str, time_of_day: str) -> ItineraryItem:
    return ItineraryItem(
        id=item_id,
        title=title,
        description=description,
        time=time_of_day,
        type="transport",
        cost=0,
        cost_per_person=0,
        image_url=TRANSFER_IMAGE,
    )


def _coerce_attractions(values: Iterable[Any] | None) -> List[Attraction]:
    attractions: List[Attraction] = []
    for value in values or []:
        if isinstance(value, Attraction):
            attractions.append(value)
            continue
        try:
            attractions.append(Attraction.model_validate(value))
        except ValidationError:
            logger.debug("Dropping malformed attraction record: %r", value)
    return attractions


def _minutes(time_of_day: str) -> int:
    hours, _, minutes = time_of_day.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def _category_label(category: str) -> str:
    first = (category or "").split(",")[0].strip()
    return first.replace("_", " ") or "place"


def _maps_url(name: str, city: str) -> str:
    return f"https://www.google.com/maps/search/{quote(f'{name}, {city}')}"
