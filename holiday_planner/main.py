from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from holiday_planner import pricing
from holiday_planner.costing import toggle_item
from holiday_planner.export import default_subject, flatten_trip_items, render_plan_html
from holiday_planner.schemas import (
    CityProfile,
    EmailPayload,
    EmailPlanPayload,
    ExportPayload,
    FlightEstimateRequest,
    TogglePayload,
    TripDetails,
)
from holiday_planner.synthesizer import synthesize_trip
from holiday_planner.tools.resend import EmailDeliveryError, ResendClient

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

M = TypeVar("M", bound=BaseModel)

app = FastAPI(title="Holiday Planner API")

# Browser frontends call the API directly; narrow this with
# HOLIDAY_PLANNER_ALLOWED_ORIGINS in deployed environments.
raw_origins = os.getenv("HOLIDAY_PLANNER_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
if not allowed_origins:
    allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validate(model: Type[M], payload: Dict[str, Any]) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


async def _deliver(to: str, subject: str, html: str) -> Dict[str, Any]:
    try:
        message_id = await ResendClient().send(to, subject, html)
    except EmailDeliveryError as exc:
        raise HTTPException(
            status_code=502,
            detail={"error": str(exc), "status": exc.status_code, "details": exc.payload},
        ) from exc
    except RuntimeError as exc:
        logger.error("Email dispatch unavailable: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"id": message_id}


@app.post("/api/plan")
async def api_plan(payload: Dict[str, Any] = Body(...), seed: Optional[int] = None) -> Dict[str, Any]:
    """Synthesize a full trip plan from the trip form."""
    details = _validate(TripDetails, payload)
    plan = await synthesize_trip(details, seed=seed)
    return plan.model_dump(mode="json")


@app.post("/api/plan/toggle")
async def api_toggle(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    request = _validate(TogglePayload, payload)
    try:
        plan = toggle_item(request.plan, request.item_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown item id: {request.item_id}") from exc
    return plan.model_dump(mode="json")


@app.post("/api/plan/items")
async def api_plan_items(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    request = _validate(ExportPayload, payload)
    items = flatten_trip_items(request.plan, request.trip_id, include_excluded=request.include_excluded)
    return {"items": items}


@app.post("/api/plan/email")
async def api_email_plan(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Render the plan as HTML and send it to the traveller."""
    request = _validate(EmailPlanPayload, payload)
    subject = request.subject or default_subject(request.plan)
    return await _deliver(request.to, subject, render_plan_html(request.plan, title=subject))


@app.post("/api/send-email")
async def api_send_email(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    request = _validate(EmailPayload, payload)
    return await _deliver(request.to, request.subject, request.html)


@app.post("/api/flight-estimate")
async def api_flight_estimate(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Distance-based fare band, plus a rough trip total when a return date is given."""
    request = _validate(FlightEstimateRequest, payload)
    band = pricing.estimate_flight_price(
        pricing.coordinates(request.origin),
        pricing.coordinates(request.destination),
        request.cabin_class,
        request.departure_date,
    )
    result = band.model_dump(mode="json")
    if request.return_date is not None:
        nights = (request.return_date - request.departure_date).days
        result["trip_total"] = pricing.estimate_total_trip_cost(
            band.average, nights, request.include_hotel, request.include_car_rental
        )
    return result


@app.get("/api/cities/{city}")
async def api_city(city: str) -> Dict[str, Any]:
    latitude, longitude = pricing.coordinates(city)
    profile = CityProfile(
        city=pricing.normalize_city_name(city) or city,
        airport_code=pricing.airport_code(city),
        latitude=latitude,
        longitude=longitude,
        cost_multiplier=round(pricing.cost_multiplier(city), 3),
    )
    return profile.model_dump()
