"""Flat persistence records and HTML email rendering for trip plans."""
from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Optional

from holiday_planner.schemas import DayPlan, TripPlan

ITEM_TYPE_LABELS = {"transport": "Transfer", "meal": "Meal", "attraction": "Activity"}


def flatten_trip_items(plan: TripPlan, trip_id: str, *, include_excluded: bool = True) -> List[Dict[str, Any]]:
    """Flatten ``plan`` into one record per bookable line, ready for a trip_items table.

    Excluded lines are kept by default with ``included=False`` so a stored plan
    can be toggled back later; pass ``include_excluded=False`` to drop them.
    """
    records: List[Dict[str, Any]] = []

    def add(record: Dict[str, Any]) -> None:
        if include_excluded or record["included"]:
            records.append({"trip_id": trip_id, **record})

    for flight, day_number in ((plan.outbound_flight, 1), (plan.return_flight, max(plan.trip_days, 1))):
        if flight is None:
            continue
        add(
            {
                "item_type": "flight",
                "name": f"{flight.airline} {flight.flight_number}",
                "description": f"{flight.origin} ({flight.origin_code}) to {flight.destination} ({flight.destination_code})",
                "cost": flight.cost,
                "included": flight.included,
                "day_number": day_number,
                "image_url": None,
                "booking_url": None,
                "provider_data": flight.model_dump(mode="json", exclude={"included", "cost"}),
            }
        )

    if plan.hotel is not None:
        hotel = plan.hotel
        add(
            {
                "item_type": "hotel",
                "name": hotel.name,
                "description": f"{hotel.nights} night(s) at {hotel.address}",
                "cost": hotel.total_price,
                "included": hotel.included,
                "day_number": 1,
                "image_url": None,
                "booking_url": None,
                "provider_data": hotel.model_dump(mode="json", exclude={"included", "total_price"}),
            }
        )

    if plan.car_rental is not None:
        car = plan.car_rental
        add(
            {
                "item_type": "car",
                "name": f"{car.company} {car.vehicle_type}",
                "description": f"{car.vehicle_name}, {car.rental_days} day(s) from {car.pickup_location}",
                "cost": car.total_price,
                "included": car.included,
                "day_number": 1,
                "image_url": None,
                "booking_url": None,
                "provider_data": car.model_dump(mode="json", exclude={"included", "total_price"}),
            }
        )

    for day in plan.itinerary:
        for item in day.items:
            add(
                {
                    "item_type": "activity",
                    "name": item.title,
                    "description": item.description,
                    "cost": item.cost,
                    "included": item.included,
                    "day_number": day.day,
                    "image_url": item.image_url,
                    "booking_url": item.booking_url,
                    "provider_data": {
                        "item_id": item.id,
                        "type": item.type,
                        "time": item.time,
                        "cost_per_person": item.cost_per_person,
                        "google_maps_url": item.google_maps_url,
                    },
                }
            )
    return records


def plan_destination(plan: TripPlan) -> Optional[str]:
    if plan.outbound_flight is not None:
        return plan.outbound_flight.destination
    return None


def default_subject(plan: TripPlan) -> str:
    destination = plan_destination(plan) or "your destination"
    return f"Your {plan.trip_days or len(plan.itinerary)}-day trip to {destination}"


def _money(amount: int, currency: str) -> str:
    return f"{amount:,} {escape(currency)}"


def _render_day(day: DayPlan, currency: str) -> str:
    rows = []
    for item in day.items:
        style = "" if item.included else ' style="color:#999;text-decoration:line-through"'
        cost = _money(item.cost, currency) if item.cost else "Included"
        rows.append(
            f"<tr{style}><td>{escape(item.time)}</td>"
            f"<td>{escape(ITEM_TYPE_LABELS.get(item.type, item.type))}</td>"
            f"<td><strong>{escape(item.title)}</strong><br>{escape(item.description)}</td>"
            f"<td align=\"right\">{cost}</td></tr>"
        )
    return (
        f"<h3>Day {day.day}: {escape(day.label)}</h3>"
        "<table width=\"100%\" cellpadding=\"4\">" + "".join(rows) + "</table>"
    )


def render_plan_html(plan: TripPlan, *, title: Optional[str] = None) -> str:
    """Render a self-contained HTML summary of ``plan`` for email clients.

    Excluded lines stay visible but struck through; only included lines count
    toward the total shown at the bottom.
    """
    currency = plan.currency
    heading = escape(title or default_subject(plan))
    parts = [f"<html><body style=\"font-family:Arial,sans-serif\"><h1>{heading}</h1>"]

    bookables = []
    for flight in (plan.outbound_flight, plan.return_flight):
        if flight is not None and flight.included:
            bookables.append(
                f"<li>Flight {escape(flight.flight_number)}: {escape(flight.origin)} "
                f"{escape(flight.departure_time)} to {escape(flight.destination)} "
                f"{escape(flight.arrival_time)} ({_money(flight.cost, currency)})</li>"
            )
    if plan.hotel is not None and plan.hotel.included:
        bookables.append(
            f"<li>Hotel: {escape(plan.hotel.name)}, {plan.hotel.nights} night(s) "
            f"({_money(plan.hotel.total_price, currency)})</li>"
        )
    if plan.car_rental is not None and plan.car_rental.included:
        bookables.append(
            f"<li>Car: {escape(plan.car_rental.vehicle_name)}, {plan.car_rental.rental_days} day(s) "
            f"({_money(plan.car_rental.total_price, currency)})</li>"
        )
    if bookables:
        parts.append("<h2>Travel</h2><ul>" + "".join(bookables) + "</ul>")

    if plan.itinerary:
        parts.append("<h2>Itinerary</h2>")
        parts.extend(_render_day(day, currency) for day in plan.itinerary)

    parts.append(f"<h2>Total: {_money(plan.total_cost, currency)}</h2></body></html>")
    return "".join(parts)
