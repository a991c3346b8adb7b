import json

import requests

BASE_URL = "http://127.0.0.1:8000"

# --- sample trip ---
payload = {
    "departureCity": "Amsterdam",
    "destinationCity": "Rome",
    "departureDate": "2026-09-04",
    "returnDate": "2026-09-08",
    "passengers": {
        "adults": 2,
        "children": 1,
        "infants": 0
    },
    "flightClass": "economy",
    "includeHotel": True,
    "includeCarRental": False
}


def _show(resp):
    print(f"\n⬅️ Status: {resp.status_code}")
    try:
        data = resp.json()
        print(json.dumps(data, indent=2))
    except ValueError:
        print(resp.text)
        return None
    return data


def run_smoke():
    url = f"{BASE_URL}/api/plan"
    headers = {"Content-Type": "application/json"}

    print(f"➡️ Sending POST {url}")
    print(json.dumps(payload, indent=2))
    plan = _show(requests.post(url, headers=headers, json=payload, params={"seed": 1}, timeout=60))
    if not plan or not plan.get("itinerary"):
        return

    # drop the first dinner and watch the total move
    url = f"{BASE_URL}/api/plan/toggle"
    print(f"\n➡️ Sending POST {url}")
    toggled = _show(requests.post(url, headers=headers, json={"plan": plan, "item_id": "day1-dinner"}, timeout=30))
    if toggled:
        print(f"\nTotal {plan['total_cost']} -> {toggled['total_cost']} {toggled['currency']}")


if __name__ == "__main__":
    run_smoke()
