"""Shared fixtures for trip planner tests."""
import pytest

from trip_planner.models.trip_form import TripForm


class FakeLLM:
    """Stands in for LLMClient: returns canned text and records prompts."""

    def __init__(self, text: str = "{}", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    async def chat(self, messages, temperature=None, max_tokens=None, json_mode=False):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def goa_form():
    return TripForm(
        origin="Mumbai",
        destination="Goa",
        startDate="2025-03-10",
        endDate="2025-03-12",
        travelers={"adults": 2, "kids": 0},
        budget="value",
    )


@pytest.fixture
def fake_llm_factory():
    return FakeLLM
