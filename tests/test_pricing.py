import random
from datetime import date

import pytest

from holiday_planner import pricing
from holiday_planner.data.cities import CITY_COORDINATES


def test_round_currency_rounds_half_up():
    assert pricing.round_currency(2.5) == 3
    assert pricing.round_currency(0.5) == 1
    assert pricing.round_currency(33.75) == 34
    assert pricing.round_currency(56.25) == 56


@pytest.mark.parametrize("label", ["Paris", "paris", "Paris, France", "PARIS (CDG)", "  Paris  "])
def test_city_labels_resolve_identically(label):
    assert pricing.cost_multiplier(label) == pytest.approx(1.5)
    assert pricing.airport_code(label) == "CDG"
    assert pricing.coordinates(label) == CITY_COORDINATES["Paris"]


def test_cost_multiplier_is_relative_to_baseline_city():
    assert pricing.cost_multiplier("Prague") == pytest.approx(1.0)
    assert pricing.cost_multiplier("New York") == pytest.approx(2.0)
    assert pricing.cost_multiplier("Atlantis") == pytest.approx(1.0)


def test_airport_code_prefers_embedded_code_and_falls_back_to_placeholder():
    assert pricing.airport_code("Somewhere (abc)") == "ABC"
    assert pricing.airport_code("Atlantis") == "XXX"


def test_unknown_city_coordinates_default_to_paris():
    assert pricing.coordinates("Atlantis") == CITY_COORDINATES["Paris"]


def test_local_prices_scale_with_multiplier():
    assert pricing.meal_price("breakfast", 1.0) == 15
    assert pricing.meal_price("dinner", 1.5) == 60
    assert pricing.local_price(pricing.HOTEL_BASE_NIGHTLY_RATE, 1.64) == 197


def test_flight_price_per_person_by_cabin():
    assert pricing.flight_price_per_person("economy") == 320
    assert pricing.flight_price_per_person("business") == 650
    assert pricing.flight_price_per_person("first") == 1200


@pytest.mark.parametrize(
    "category, rating, band",
    [
        ("museums,cultural,interesting_places", 3.0, (15, 30)),
        ("historic_architecture", None, (10, 25)),
        ("religion,churches", 9.0, (0, 15)),
        ("natural,gardens_and_parks", 1.0, (5, 20)),
        ("theatres_and_entertainments", 1.0, (20, 50)),
        ("cultural", 1.0, (10, 35)),
        ("shopping", 8.0, (20, 45)),
        ("shopping", None, (20, 45)),
        ("shopping", 6.0, (12, 30)),
        ("", 4.0, (8, 20)),
        (None, 2.0, (0, 15)),
    ],
)
def test_attraction_price_band(category, rating, band):
    assert pricing.attraction_price_band(category, rating) == band


def test_attraction_price_stays_inside_band():
    rng = random.Random(42)
    for _ in range(200):
        price = pricing.attraction_price("museum", 5.0, rng)
        assert 15 <= price <= 30


def test_seasonal_multiplier():
    assert pricing.seasonal_multiplier(7) == 1.3
    assert pricing.seasonal_multiplier(12) == 1.4
    assert pricing.seasonal_multiplier(4) == 1.1
    assert pricing.seasonal_multiplier(2) == 0.9


def test_haversine_paris_to_london():
    distance = pricing.haversine_km(CITY_COORDINATES["Paris"], CITY_COORDINATES["London"])
    assert distance == pytest.approx(344, abs=5)


def test_estimate_flight_price_applies_minimum_fare_and_season():
    paris = CITY_COORDINATES["Paris"]
    band = pricing.estimate_flight_price(paris, paris, "economy", date(2026, 1, 15))

    # minimum economy fare 50, January multiplier 0.9
    assert band.average == 45
    assert band.min == 34
    assert band.max == 56
    assert band.distance_km == 0


def test_estimate_flight_price_scales_with_distance_and_cabin():
    paris, new_york = CITY_COORDINATES["Paris"], CITY_COORDINATES["New York"]
    economy = pricing.estimate_flight_price(paris, new_york, "economy", date(2026, 7, 1))
    business = pricing.estimate_flight_price(paris, new_york, "business", date(2026, 7, 1))

    distance = pricing.haversine_km(paris, new_york)
    assert economy.average == pricing.round_currency(distance * 0.15 * 1.3)
    assert business.average > economy.average * 3
    assert economy.min < economy.average < economy.max


def test_estimate_total_trip_cost():
    assert pricing.estimate_total_trip_cost(300, 4, True, True) == 1280
    assert pricing.estimate_total_trip_cost(300, 4, False, False) == 600
    assert pricing.estimate_total_trip_cost(300, 4, True, False) == 1080
