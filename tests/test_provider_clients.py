import asyncio
from typing import Any, Dict, List

import httpx
import pytest

from holiday_planner import pricing
from holiday_planner.tools import opentripmap, pexels, resend
from holiday_planner.tools.opentripmap import OpenTripMapClient
from holiday_planner.tools.pexels import PexelsClient
from holiday_planner.tools.resend import EmailDeliveryError, ResendClient


class DummyResponse:
    def __init__(self, payload: Any, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                "error",
                request=httpx.Request("GET", "https://example.test"),
                response=httpx.Response(self.status_code),
            )
        return None

    def json(self):
        return self._payload


class DummyAsyncClient:
    """Stands in for httpx.AsyncClient and records every request."""

    def __init__(self, response: DummyResponse, requests: List[Dict[str, Any]], error: Exception | None = None):
        self.response = response
        self.requests = requests
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def get(self, url, params=None, headers=None):
        self.requests.append({"method": "GET", "url": url, "params": params, "headers": headers})
        if self.error:
            raise self.error
        return self.response

    async def post(self, url, json=None, headers=None):
        self.requests.append({"method": "POST", "url": url, "json": json, "headers": headers})
        if self.error:
            raise self.error
        return self.response


def _install(monkeypatch, module, response: DummyResponse, error: Exception | None = None) -> List[Dict[str, Any]]:
    requests: List[Dict[str, Any]] = []
    monkeypatch.setattr(
        module.httpx,
        "AsyncClient",
        lambda *args, **kwargs: DummyAsyncClient(response, requests, error),
    )
    return requests


# ---------- OpenTripMap ----------
def test_opentripmap_without_key_returns_nothing(monkeypatch):
    monkeypatch.delenv("OPENTRIPMAP_API_KEY", raising=False)
    requests = _install(monkeypatch, opentripmap, DummyResponse([]))

    result = asyncio.run(OpenTripMapClient().fetch_attractions("Prague", 50.07, 14.43, limit=5))

    assert result == []
    assert requests == []


def test_opentripmap_parses_named_unique_places(monkeypatch):
    payload = [
        {"name": "Prague Castle", "kinds": "historic,castles", "rate": "3h"},
        {"name": "", "kinds": "other", "rate": 1},
        {"name": "prague castle", "kinds": "historic", "rate": 3},
        {"name": "National Museum", "kinds": "museums,cultural", "rate": 2},
        {"name": "Letna Park", "kinds": "natural", "rate": None},
    ]
    requests = _install(monkeypatch, opentripmap, DummyResponse(payload))
    client = OpenTripMapClient(api_key="otm-key")

    result = asyncio.run(client.fetch_attractions("Prague", 50.07, 14.43, limit=2, radius=5000))

    assert [attraction.name for attraction in result] == ["Prague Castle", "National Museum"]
    assert result[0].category == "historic,castles"
    assert result[0].rating == 10.0
    params = requests[0]["params"]
    assert params["limit"] == 4
    assert params["radius"] == 5000
    assert (params["lat"], params["lon"]) == (50.07, 14.43)
    assert params["apikey"] == "otm-key"


def test_opentripmap_accepts_geojson(monkeypatch):
    payload = {"features": [{"properties": {"name": "Old Town Square", "kinds": "squares", "rate": 2}}]}
    _install(monkeypatch, opentripmap, DummyResponse(payload))

    result = asyncio.run(OpenTripMapClient(api_key="k").fetch_attractions("Prague", 50.0, 14.0, limit=3))

    assert [attraction.name for attraction in result] == ["Old Town Square"]
    assert result[0].rating == 6.7


def test_opentripmap_rates_map_onto_pricing_scale(monkeypatch):
    payload = [
        {"name": "Dancing House", "kinds": "skyscrapers", "rate": "3h"},
        {"name": "Lennon Wall", "kinds": "urban_environment", "rate": 2},
        {"name": "Side Street", "kinds": "other", "rate": 1},
    ]
    _install(monkeypatch, opentripmap, DummyResponse(payload))

    result = asyncio.run(OpenTripMapClient(api_key="k").fetch_attractions("Prague", 50.0, 14.0, limit=3))

    bands = [pricing.attraction_price_band(attraction.category, attraction.rating) for attraction in result]
    assert [attraction.rating for attraction in result] == [10.0, 6.7, 3.3]
    assert bands == [(20, 45), (12, 30), (8, 20)]


def test_opentripmap_propagates_http_errors(monkeypatch):
    _install(monkeypatch, opentripmap, DummyResponse({"error": "quota"}, status_code=429))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(OpenTripMapClient(api_key="k").fetch_attractions("Prague", 50.0, 14.0))


# ---------- Pexels ----------
def test_pexels_returns_medium_photo(monkeypatch):
    payload = {"photos": [{"src": {"medium": "https://img.test/m.jpg", "large": "https://img.test/l.jpg"}}]}
    requests = _install(monkeypatch, pexels, DummyResponse(payload))

    url = asyncio.run(PexelsClient(api_key="px").find_photo("Charles Bridge", "Prague"))

    assert url == "https://img.test/m.jpg"
    assert requests[0]["params"]["query"] == "Charles Bridge Prague"
    assert requests[0]["params"]["per_page"] == 5
    assert requests[0]["headers"] == {"Authorization": "px"}


def test_pexels_falls_back_to_large_photo(monkeypatch):
    payload = {"photos": [{"src": {"large": "https://img.test/l.jpg"}}]}
    _install(monkeypatch, pexels, DummyResponse(payload))

    assert asyncio.run(PexelsClient(api_key="px").find_photo("Charles Bridge")) == "https://img.test/l.jpg"


def test_pexels_without_results_or_key_returns_none(monkeypatch):
    monkeypatch.delenv("PEXELS_API_KEY", raising=False)
    requests = _install(monkeypatch, pexels, DummyResponse({"photos": []}))

    assert asyncio.run(PexelsClient().find_photo("Nothing")) is None
    assert requests == []
    assert asyncio.run(PexelsClient(api_key="px").find_photo("Nothing")) is None


# ---------- Resend ----------
def test_resend_requires_api_key(monkeypatch):
    monkeypatch.delenv("RESEND_API_KEY", raising=False)

    with pytest.raises(RuntimeError, match="RESEND_API_KEY"):
        asyncio.run(ResendClient().send("a@b.test", "Hi", "<p>Hi</p>"))


def test_resend_posts_message_and_returns_id(monkeypatch):
    monkeypatch.delenv("RESEND_SENDER", raising=False)
    requests = _install(monkeypatch, resend, DummyResponse({"id": "msg_123"}))

    message_id = asyncio.run(ResendClient(api_key="re_key").send("a@b.test", "Your trip", "<p>Trip</p>"))

    assert message_id == "msg_123"
    sent = requests[0]
    assert sent["url"] == "https://api.resend.com/emails"
    assert sent["headers"] == {"Authorization": "Bearer re_key"}
    assert sent["json"] == {
        "from": "Best Holiday Plan <noreply@best-travel-plan.cloud>",
        "to": ["a@b.test"],
        "subject": "Your trip",
        "html": "<p>Trip</p>",
    }


def test_resend_rejection_carries_provider_details(monkeypatch):
    _install(monkeypatch, resend, DummyResponse({"message": "Invalid `to` field"}, status_code=422))

    with pytest.raises(EmailDeliveryError) as excinfo:
        asyncio.run(ResendClient(api_key="re_key").send("a@b.test", "Hi", "<p>Hi</p>"))

    assert excinfo.value.status_code == 422
    assert excinfo.value.payload == {"message": "Invalid `to` field"}


def test_resend_transport_failure_is_a_delivery_error(monkeypatch):
    _install(monkeypatch, resend, DummyResponse({}), error=httpx.ConnectError("unreachable"))

    with pytest.raises(EmailDeliveryError, match="Failed to reach Resend"):
        asyncio.run(ResendClient(api_key="re_key").send("a@b.test", "Hi", "<p>Hi</p>"))
