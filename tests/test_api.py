"""Tests for the HTTP endpoints."""
import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from trip_planner.api import routes
from trip_planner.errors import LLMConfigurationError
from trip_planner.main import app
from trip_planner.services.planner import TripPlanner


GOA_BRIEF = {
    "origin": "Mumbai",
    "destination": "Goa",
    "domestic": True,
    "startDate": "2025-03-10",
    "endDate": "2025-03-11",
    "travelers": {"adults": 2, "kids": 1},
    "budget": "value",
}


class StubResolver:
    def __init__(self, url=None, error=None):
        self.url = url
        self.error = error
        self.calls = []

    async def resolve(self, query, width, height):
        self.calls.append((query, width, height))
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def client():
    return TestClient(app)


class TestPlanEndpoint:
    """Test POST /api/ai/plan."""

    def test_plan(self, client, monkeypatch, fake_llm_factory):
        llm = fake_llm_factory(json.dumps({
            "summary": "Beach days",
            "days": [{"date": "2025-03-10", "plan": [{"time": "09:00", "title": "Baga Beach"}]}],
        }))
        monkeypatch.setattr(routes, "get_planner", lambda: TripPlanner(llm=llm))

        response = client.post("/api/ai/plan", json=GOA_BRIEF)

        assert response.status_code == 200
        data = response.json()
        assert data["summary"] == "Beach days"
        assert [d["date"] for d in data["days"]] == ["2025-03-10", "2025-03-11"]
        assert data["days"][0]["plan"][0]["title"] == "Baga Beach"
        assert data["days"][0]["stayTonight"]
        assert "costHints" in data
        assert "googleQuery" in data["hotels"][0]

    def test_missing_api_key(self, client, monkeypatch):
        def unavailable():
            raise LLMConfigurationError("LLM API key missing")
        monkeypatch.setattr(routes, "get_planner", unavailable)

        response = client.post("/api/ai/plan", json=GOA_BRIEF)

        assert response.status_code == 500
        assert response.json()["detail"] == "LLM API key missing"

    @pytest.mark.parametrize("change", [
        {"destination": "   "},
        {"budget": "luxury"},
        {"travelers": {"adults": 0, "kids": 0}},
        {"travelers": {"adults": 2, "kids": -1}},
    ])
    def test_invalid_brief(self, client, monkeypatch, fake_llm_factory, change):
        monkeypatch.setattr(routes, "get_planner", lambda: TripPlanner(llm=fake_llm_factory()))

        response = client.post("/api/ai/plan", json={**GOA_BRIEF, **change})

        assert response.status_code == 422


class TestPhotoEndpoint:
    """Test GET /api/photo."""

    def test_resolved(self, client, monkeypatch):
        resolver = StubResolver(url="https://upload.wikimedia.org/baga.jpg")
        monkeypatch.setattr(routes, "photo_resolver", resolver)

        response = client.get("/api/photo", params={"q": "Baga Beach", "w": "640", "h": "abc"},
                              follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://upload.wikimedia.org/baga.jpg"
        assert "max-age=86400" in response.headers["cache-control"]
        assert resolver.calls == [("Baga Beach", 640, 600)]

    def test_defaults(self, client, monkeypatch):
        resolver = StubResolver(url="https://example.com/travel.jpg")
        monkeypatch.setattr(routes, "photo_resolver", resolver)

        client.get("/api/photo", params={"w": "10"}, follow_redirects=False)

        assert resolver.calls == [("travel", 200, 600)]

    @pytest.mark.parametrize("error", [asyncio.TimeoutError(), RuntimeError("boom")])
    def test_failure_redirects_to_placeholder(self, client, monkeypatch, error):
        monkeypatch.setattr(routes, "photo_resolver", StubResolver(error=error))

        response = client.get("/api/photo", params={"q": "Baga Beach"}, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://picsum.photos/seed/Baga%20Beach/800/600"
        assert response.headers["cache-control"] == "no-store"


class TestOverviewEndpoint:
    """Test POST /api/trip/overview."""

    def test_overview_without_plan(self, client):
        response = client.post("/api/trip/overview", json={"form": GOA_BRIEF, "intensity": "relaxed"})

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "goa"
        assert data["nights"] == 1
        assert data["dateRange"] == "10/03/2025 → 11/03/2025"
        assert all(len(d["plan"]) <= 4 for d in data["days"])
        assert "Snacks for kids" in data["packingList"]
        assert data["links"]["directions"].startswith("https://www.google.com/maps/dir/")
        assert data["costs"]["perPerson"] > 0

    def test_overview_with_plan(self, client):
        plan = {"days": [{"date": "2025-03-10", "plan": [
            {"time": "09:00", "title": "Baga Beach"},
            {"time": "11:00", "title": "Fort Aguada"},
        ]}]}

        response = client.post(
            "/api/trip/overview",
            json={"form": GOA_BRIEF, "plan": plan, "interests": ["culture"]},
        )

        assert response.status_code == 200
        titles = [i["title"] for i in response.json()["days"][0]["plan"]]
        assert titles == ["Fort Aguada", "Baga Beach"]

    def test_unknown_interest(self, client):
        response = client.post("/api/trip/overview", json={"form": GOA_BRIEF, "interests": ["nightlife"]})
        assert response.status_code == 422


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
