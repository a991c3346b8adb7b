"""Totals and reversible inclusion toggles for synthesized plans."""
from __future__ import annotations

from typing import Iterator, Tuple

from holiday_planner.schemas import TripPlan


def iter_line_costs(plan: TripPlan) -> Iterator[Tuple[str, int, bool]]:
    """Yield ``(id, cost, included)`` for every priced line in the plan."""
    for flight in (plan.outbound_flight, plan.return_flight):
        if flight is not None:
            yield flight.id, flight.cost, flight.included
    if plan.hotel is not None:
        yield plan.hotel.id, plan.hotel.total_price, plan.hotel.included
    if plan.car_rental is not None:
        yield plan.car_rental.id, plan.car_rental.total_price, plan.car_rental.included
    for day in plan.itinerary:
        for item in day.items:
            yield item.id, item.cost, item.included


def compute_total_cost(plan: TripPlan) -> int:
    return sum(cost for _, cost, included in iter_line_costs(plan) if included)


def toggle_item(plan: TripPlan, item_id: str) -> TripPlan:
    """Return a copy of ``plan`` with ``item_id`` flipped and the total refreshed.

    Raises ``KeyError`` when no flight, hotel, car rental or itinerary item
    carries that id. The input plan is left untouched.
    """
    updated = plan.model_copy(deep=True)
    target = None
    for candidate in (updated.outbound_flight, updated.return_flight, updated.hotel, updated.car_rental):
        if candidate is not None and candidate.id == item_id:
            target = candidate
            break
    if target is None:
        target = next(
            (item for day in updated.itinerary for item in day.items if item.id == item_id),
            None,
        )
    if target is None:
        raise KeyError(item_id)

    target.included = not target.included
    updated.total_cost = compute_total_cost(updated)
    return updated
