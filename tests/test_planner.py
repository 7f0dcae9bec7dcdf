"""Tests for the planning pipeline."""
import json
from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from openai import APIConnectionError

from trip_planner.config import settings
from trip_planner.models.trip_form import TripForm
from trip_planner.services import planner as planner_module
from trip_planner.services.llm_client import LLMClient
from trip_planner.services.planner import TripPlanner
from trip_planner.services.sanitizer import norm, sanitize_plan


MODEL_PLAN = {
    "summary": "Sun, sand and forts",
    "days": [
        {"date": "2025-03-10", "plan": [
            {"time": "09:00", "title": "Fort Aguada", "note": "Go early"},
            {"time": "11:30", "title": "Baga Beach"},
        ]},
        {"date": "2025-03-11", "plan": [
            {"time": "09:00", "title": "Fort Aguada"},
            {"time": "11:30", "title": "Basilica of Bom Jesus"},
        ]},
    ],
    "restaurants": [{"name": "Gunpowder", "note": "South Indian"}],
    "tips": ["Rent a scooter"],
}


class TestTripPlanner:
    """Test request -> prompt -> model -> parse -> sanitize."""

    @pytest.mark.asyncio
    async def test_generate(self, goa_form, fake_llm_factory):
        llm = fake_llm_factory("```json\n" + json.dumps(MODEL_PLAN) + "\n```")
        planner = TripPlanner(llm=llm)

        plan = await planner.generate(goa_form)

        assert len(llm.calls) == 1
        assert "2025-03-10, 2025-03-11, 2025-03-12" in llm.calls[0][1]["content"]
        assert plan.summary == "Sun, sand and forts"
        assert len(plan.days) == 3
        titles = [norm(t) for t in plan.all_titles()]
        assert titles.count("fort aguada") == 1
        assert len(titles) == len(set(titles))
        assert plan.restaurants[0].google_query == "Gunpowder Goa"
        assert plan.tips == ["Rent a scooter"]

    @pytest.mark.asyncio
    async def test_upstream_failure_uses_fallbacks(self, goa_form, fake_llm_factory):
        error = APIConnectionError(request=httpx.Request("POST", "https://example.com"))
        planner = TripPlanner(llm=fake_llm_factory(error=error))

        plan = await planner.generate(goa_form)

        assert plan.summary == "Trip plan for Goa"
        assert len(plan.days) == 3
        assert plan.days[0].plan[0].title == "Old Town Walk"

    @pytest.mark.asyncio
    async def test_garbage_response(self, goa_form, fake_llm_factory):
        planner = TripPlanner(llm=fake_llm_factory("Sorry, I can't do that."))

        plan = await planner.generate(goa_form)

        assert plan.summary == "Trip plan for Goa"
        assert all(len(d.plan) <= 6 for d in plan.days)

    @pytest.mark.asyncio
    async def test_undated_trip_plans_today(self, fake_llm_factory):
        llm = fake_llm_factory("{}")
        planner = TripPlanner(llm=llm)
        form = TripForm(destination="Jaipur")

        plan = await planner.generate(form, today=date(2025, 6, 1))

        assert [d.date for d in plan.days] == ["2025-06-01"]
        assert "2025-06-01" in llm.calls[0][1]["content"]

    def test_trip_dates_capped(self, fake_llm_factory):
        planner = TripPlanner(llm=fake_llm_factory(), max_days=3)
        form = TripForm(destination="Goa", startDate="2025-01-01", endDate="2025-02-01")
        assert planner.trip_dates(form) == ["2025-01-01", "2025-01-02", "2025-01-03"]

    @pytest.mark.asyncio
    async def test_empty_completion_uses_fallbacks(self, monkeypatch, goa_form):
        monkeypatch.setattr(settings, "llm_provider", "gemini")
        monkeypatch.setattr(settings, "llm_api_key", "test-key")
        llm = LLMClient()
        create = AsyncMock(return_value=SimpleNamespace(choices=[]))
        llm.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        plan = await TripPlanner(llm=llm).generate(goa_form)

        assert plan.summary == "Trip plan for Goa"
        assert [d.date for d in plan.days] == ["2025-03-10", "2025-03-11", "2025-03-12"]

    @pytest.mark.asyncio
    async def test_plan_uses_prompt_dates(self, monkeypatch, fake_llm_factory):
        """The sanitized plan covers exactly the dates sent to the model."""
        seen = {}

        def capture(raw, form, **kwargs):
            seen.update(kwargs)
            return sanitize_plan(raw, form, **kwargs)

        monkeypatch.setattr(planner_module, "sanitize_plan", capture)
        llm = fake_llm_factory("{}")
        form = TripForm(destination="Jaipur")

        plan = await TripPlanner(llm=llm).generate(form, today=date(2025, 6, 1))

        assert seen["dates"] == ["2025-06-01"]
        assert [d.date for d in plan.days] == ["2025-06-01"]
