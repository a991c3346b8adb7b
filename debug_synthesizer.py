# debug_synthesizer.py
import asyncio
import json

from holiday_planner.schemas import TripDetails
from holiday_planner.synthesizer import synthesize_trip


async def main():
    details = TripDetails.model_validate(
        {
            "departureCity": "Berlin (BER)",
            "destinationCity": "Lisbon, Portugal",
            "departureDate": "2026-06-12",
            "returnDate": "2026-06-16",
            "passengers": {"adults": 2, "children": 1, "infants": 1},
            "flightClass": "economy",
            "includeHotel": True,
            "includeCarRental": True,
            "pricing_strategy": "distance",
        }
    )

    # Call synthesizer directly
    plan = await synthesize_trip(details, seed=42)
    print("➡️ Synthesizer returned:\n")
    print(json.dumps(plan.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
