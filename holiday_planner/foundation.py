"""Normalises trip details into the fundamentals the synthesizer builds on."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from holiday_planner.pricing import normalize_city_name
from holiday_planner.schemas import TripDetails

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

DEFAULT_TRIP_LENGTH_DAYS = 5


@dataclass(frozen=True)
class TripFoundation:
    departure_date: date
    return_date: date
    trip_days: int
    nights: int
    priced_passengers: int
    headcount: int
    origin_name: str
    destination_name: str
    dates_defaulted: bool

    @property
    def calendar(self) -> List[date]:
        return [self.departure_date + timedelta(days=offset) for offset in range(self.trip_days)]


def extract_foundation(details: TripDetails, *, today: date | None = None) -> TripFoundation:
    """Return derived trip fundamentals for ``details``.

    Missing dates are filled in rather than rejected: the trip departs today
    and returns ``DEFAULT_TRIP_LENGTH_DAYS`` later. The day count includes
    both the departure and the return day.
    """
    departure = details.departure_date or today or date.today()
    returning = details.return_date or departure + timedelta(days=DEFAULT_TRIP_LENGTH_DAYS)
    if returning < departure:
        # TripDetails rejects a past return date; this covers an explicit later ``today``
        logger.warning(
            "Return date %s is before the defaulted departure %s; planning a same-day trip",
            returning.isoformat(),
            departure.isoformat(),
        )
        returning = departure

    trip_days = (returning - departure).days + 1
    return TripFoundation(
        departure_date=departure,
        return_date=returning,
        trip_days=trip_days,
        nights=max(0, trip_days - 1),
        priced_passengers=details.passengers.priced,
        headcount=details.passengers.headcount,
        origin_name=normalize_city_name(details.departure_city) or details.departure_city,
        destination_name=normalize_city_name(details.destination_city) or details.destination_city,
        dates_defaulted=details.departure_date is None or details.return_date is None,
    )
