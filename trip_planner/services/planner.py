"""
Trip Planner - request -> prompt -> model call -> parse -> sanitize.
"""
from datetime import date
from typing import Optional
import logging

import httpx
from openai import OpenAIError

from .llm_client import LLMClient, get_llm_client, parse_json_response
from .prompts import build_plan_messages
from .sanitizer import range_dates, sanitize_plan
from ..config import settings
from ..models.trip_form import TripForm
from ..models.plan import AIPlan

logger = logging.getLogger(__name__)


class TripPlanner:
    """Generates sanitized trip plans for a trip brief."""

    def __init__(self, llm: Optional[LLMClient] = None, max_days: Optional[int] = None):
        self.llm = llm or get_llm_client()
        self.max_days = max_days or settings.max_trip_days

    def trip_dates(self, form: TripForm, today: Optional[date] = None) -> list[str]:
        """The dates to plan for; today alone when the form's range is unusable."""
        dates = range_dates(form.start_date, form.end_date, limit=self.max_days)
        return dates or [(today or date.today()).isoformat()]

    async def generate(self, form: TripForm, today: Optional[date] = None) -> AIPlan:
        """
        Generate a plan for the trip.

        A failed model call is not retried: the plan is then built entirely
        from the fallback pools.
        """
        dates = self.trip_dates(form, today)
        messages = build_plan_messages(form, dates)

        try:
            text = await self.llm.chat(messages, json_mode=True)
        except (OpenAIError, httpx.HTTPError) as e:
            logger.error(f"LLM call failed for {form.destination}: {e}")
            text = "{}"

        raw = parse_json_response(text)
        if not raw:
            logger.warning(f"Empty model plan for {form.destination}, using fallback pools")

        return sanitize_plan(raw, form, max_days=self.max_days, dates=dates)


# Global planner instance
planner: Optional[TripPlanner] = None


def get_planner() -> TripPlanner:
    """Get or create the global planner."""
    global planner
    if planner is None:
        planner = TripPlanner()
    return planner
