"""Static city reference data used by the pricing lookups."""
from __future__ import annotations

from typing import Dict, Tuple

DEFAULT_CITY = "Paris"
UNKNOWN_AIRPORT_CODE = "XXX"

# Cost-of-living index per city (New York = 100). A mid-range city sits at 50.
BASELINE_COST_INDEX = 50.0

CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    # Europe
    "Paris": (48.8566, 2.3522),
    "Barcelona": (41.3874, 2.1686),
    "Rome": (41.9028, 12.4964),
    "London": (51.5074, -0.1278),
    "Amsterdam": (52.3676, 4.9041),
    "Berlin": (52.52, 13.405),
    "Madrid": (40.4168, -3.7038),
    "Prague": (50.0755, 14.4378),
    "Vienna": (48.2082, 16.3738),
    "Athens": (37.9838, 23.7275),
    "Lisbon": (38.7223, -9.1393),
    "Dublin": (53.3498, -6.2603),
    "Frankfurt": (50.1109, 8.6821),
    "Munich": (48.1351, 11.582),
    "Brussels": (50.8503, 4.3517),
    "Zurich": (47.3769, 8.5417),
    "Geneva": (46.2044, 6.1432),
    "Copenhagen": (55.6761, 12.5683),
    "Stockholm": (59.3293, 18.0686),
    "Oslo": (59.9139, 10.7522),
    "Helsinki": (60.1699, 24.9384),
    "Warsaw": (52.2297, 21.0122),
    "Budapest": (47.4979, 19.0402),
    "Bucharest": (44.4268, 26.1025),
    "Sofia": (42.6977, 23.3219),
    "Zagreb": (45.815, 15.9819),
    "Belgrade": (44.7866, 20.4489),
    # Asia
    "Tokyo": (35.6762, 139.6503),
    "Dubai": (25.2048, 55.2708),
    "Bangkok": (13.7563, 100.5018),
    "Singapore": (1.3521, 103.8198),
    "Hong Kong": (22.3193, 114.1694),
    "Seoul": (37.5665, 126.978),
    "Istanbul": (41.0082, 28.9784),
    # Americas
    "New York": (40.7128, -74.006),
    "Los Angeles": (34.0522, -118.2437),
    "Miami": (25.7617, -80.1918),
    "Toronto": (43.6532, -79.3832),
    "Mexico City": (19.4326, -99.1332),
    "Rio de Janeiro": (-22.9068, -43.1729),
    "Buenos Aires": (-34.6037, -58.3816),
    # Oceania
    "Sydney": (-33.8688, 151.2093),
    "Melbourne": (-37.8136, 144.9631),
    "Auckland": (-36.8485, 174.7633),
    # Africa & Middle East
    "Cairo": (30.0444, 31.2357),
    "Cape Town": (-33.9249, 18.4241),
    "Tel Aviv": (32.0853, 34.7818),
}

AIRPORT_CODES: Dict[str, str] = {
    "Paris": "CDG",
    "Barcelona": "BCN",
    "Rome": "FCO",
    "London": "LHR",
    "Amsterdam": "AMS",
    "Berlin": "BER",
    "Madrid": "MAD",
    "Prague": "PRG",
    "Vienna": "VIE",
    "Athens": "ATH",
    "Tokyo": "NRT",
    "Dubai": "DXB",
    "Bangkok": "BKK",
    "Singapore": "SIN",
    "Hong Kong": "HKG",
    "Seoul": "ICN",
    "Istanbul": "IST",
    "New York": "JFK",
    "Los Angeles": "LAX",
    "Miami": "MIA",
    "Toronto": "YYZ",
    "Mexico City": "MEX",
    "Rio de Janeiro": "GIG",
    "Buenos Aires": "EZE",
    "Sydney": "SYD",
    "Melbourne": "MEL",
    "Auckland": "AKL",
    "Cairo": "CAI",
    "Cape Town": "CPT",
    "Tel Aviv": "TLV",
    "Frankfurt": "FRA",
    "Munich": "MUC",
    "Lisbon": "LIS",
    "Dublin": "DUB",
    "Brussels": "BRU",
    "Zurich": "ZRH",
    "Geneva": "GVA",
    "Copenhagen": "CPH",
    "Stockholm": "ARN",
    "Oslo": "OSL",
    "Helsinki": "HEL",
    "Warsaw": "WAW",
    "Budapest": "BUD",
    "Bucharest": "OTP",
    "Sofia": "SOF",
    "Zagreb": "ZAG",
    "Belgrade": "BEG",
}

COST_OF_LIVING_INDEX: Dict[str, float] = {
    "Paris": 75.0,
    "Barcelona": 58.0,
    "Rome": 65.0,
    "London": 82.0,
    "Amsterdam": 78.0,
    "Berlin": 68.0,
    "Madrid": 55.0,
    "Prague": 50.0,
    "Vienna": 68.0,
    "Athens": 52.0,
    "Lisbon": 52.0,
    "Dublin": 78.0,
    "Frankfurt": 70.0,
    "Munich": 74.0,
    "Brussels": 70.0,
    "Zurich": 120.0,
    "Geneva": 118.0,
    "Copenhagen": 86.0,
    "Stockholm": 72.0,
    "Oslo": 88.0,
    "Helsinki": 74.0,
    "Warsaw": 45.0,
    "Budapest": 44.0,
    "Bucharest": 40.0,
    "Sofia": 38.0,
    "Zagreb": 48.0,
    "Belgrade": 40.0,
    "Tokyo": 76.0,
    "Dubai": 65.0,
    "Bangkok": 42.0,
    "Singapore": 85.0,
    "Hong Kong": 80.0,
    "Seoul": 73.0,
    "Istanbul": 38.0,
    "New York": 100.0,
    "Los Angeles": 80.0,
    "Miami": 78.0,
    "Toronto": 68.0,
    "Mexico City": 40.0,
    "Rio de Janeiro": 40.0,
    "Buenos Aires": 36.0,
    "Sydney": 80.0,
    "Melbourne": 75.0,
    "Auckland": 75.0,
    "Cairo": 25.0,
    "Cape Town": 45.0,
    "Tel Aviv": 88.0,
}
