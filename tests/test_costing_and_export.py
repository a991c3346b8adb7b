from datetime import date

import pytest

from holiday_planner.costing import compute_total_cost, iter_line_costs, toggle_item
from holiday_planner.export import default_subject, flatten_trip_items, render_plan_html
from holiday_planner.schemas import CarRental, DayPlan, Flight, Hotel, ItineraryItem, TripPlan


def _flight(flight_id: str, origin: str, destination: str) -> Flight:
    return Flight(
        id=flight_id,
        airline="SkyWings Airlines",
        flight_number="SW 1247",
        origin=origin,
        origin_code=origin[:3].upper(),
        destination=destination,
        destination_code=destination[:3].upper(),
        departure_time="09:15",
        arrival_time="12:45",
        duration="3h 30m",
        cabin_class="economy",
        price_per_person=320,
        cost=640,
    )


def _plan() -> TripPlan:
    plan = TripPlan(
        outbound_flight=_flight("outbound-1", "Berlin", "Lisbon"),
        return_flight=_flight("return-1", "Lisbon", "Berlin"),
        hotel=Hotel(
            id="hotel-1",
            name="Grand Lisbon Palace Hotel",
            rating=4.5,
            address="123 Central Avenue, Lisbon",
            distance_from_airport="18 km from airport",
            price_per_night=130,
            nights=1,
            total_price=130,
        ),
        car_rental=CarRental(
            id="car-1",
            company="EuroMobility",
            vehicle_type="Compact",
            vehicle_name="Volkswagen Tiguan or similar",
            pickup_location="Lisbon Airport",
            dropoff_location="Lisbon Airport",
            pickup_time="2026-04-01 12:45",
            dropoff_time="2026-04-02 16:00",
            price_per_day=55,
            rental_days=1,
            total_price=55,
            included=False,
        ),
        itinerary=[
            DayPlan(
                day=1,
                date=date(2026, 4, 1),
                label="Wed, Apr 1",
                items=[
                    ItineraryItem(id="day1-lunch", title="Lunch at Lisbon", time="12:00", type="meal", cost=54, cost_per_person=27),
                    ItineraryItem(
                        id="day1-attraction0",
                        title="Fado <Live> & Dinner",
                        description="Evening show",
                        time="20:00",
                        type="attraction",
                        cost=60,
                        cost_per_person=30,
                        image_url="https://images.test/fado.jpg",
                    ),
                ],
            ),
            DayPlan(
                day=2,
                date=date(2026, 4, 2),
                label="Thu, Apr 2",
                items=[ItineraryItem(id="day2-breakfast", title="Breakfast at Lisbon", time="08:00", type="meal", cost=32, cost_per_person=16)],
            ),
        ],
        trip_days=2,
        priced_passengers=2,
    )
    plan.total_cost = compute_total_cost(plan)
    return plan


def test_total_skips_excluded_lines():
    plan = _plan()

    assert plan.total_cost == 640 + 640 + 130 + 54 + 60 + 32
    assert len(list(iter_line_costs(plan))) == 7


@pytest.mark.parametrize("item_id, delta", [("car-1", 55), ("hotel-1", -130), ("return-1", -640), ("day2-breakfast", -32)])
def test_toggle_adjusts_total_by_the_line_cost(item_id, delta):
    plan = _plan()

    toggled = toggle_item(plan, item_id)

    assert toggled.total_cost == plan.total_cost + delta


def test_toggle_leaves_the_input_plan_untouched():
    plan = _plan()
    before = plan.model_dump()

    toggled = toggle_item(plan, "day1-lunch")

    assert plan.model_dump() == before
    assert toggled.itinerary[0].items[0].included is False


def test_toggle_unknown_item_raises_key_error():
    with pytest.raises(KeyError):
        toggle_item(_plan(), "day9-dinner")


def test_flatten_emits_one_record_per_line():
    records = flatten_trip_items(_plan(), "trip-42")

    assert len(records) == 7
    assert {record["trip_id"] for record in records} == {"trip-42"}
    assert [record["item_type"] for record in records] == ["flight", "flight", "hotel", "car", "activity", "activity", "activity"]

    outbound, inbound = records[0], records[1]
    assert outbound["day_number"] == 1 and inbound["day_number"] == 2
    assert outbound["name"] == "SkyWings Airlines SW 1247"
    assert outbound["provider_data"]["origin_code"] == "BER"

    car = records[3]
    assert car["included"] is False
    assert car["cost"] == 55

    fado = records[5]
    assert fado["day_number"] == 1
    assert fado["image_url"] == "https://images.test/fado.jpg"
    assert fado["provider_data"]["item_id"] == "day1-attraction0"
    assert fado["provider_data"]["time"] == "20:00"


def test_flatten_can_drop_excluded_lines():
    records = flatten_trip_items(_plan(), "trip-42", include_excluded=False)

    assert len(records) == 6
    assert all(record["included"] for record in records)
    assert "car" not in {record["item_type"] for record in records}


def test_render_plan_html_escapes_and_totals():
    plan = toggle_item(_plan(), "day1-lunch")

    html = render_plan_html(plan)

    assert "Your 2-day trip to Lisbon" in html
    assert "Fado &lt;Live&gt; &amp; Dinner" in html
    assert "<Live>" not in html
    assert "line-through" in html
    assert f"Total: {plan.total_cost:,} EUR" in html
    # excluded car rental is not listed under travel
    assert "Volkswagen Tiguan" not in html


def test_default_subject_without_flights():
    plan = TripPlan(trip_days=4)

    assert default_subject(plan) == "Your 4-day trip to your destination"
