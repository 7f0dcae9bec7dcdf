"""
Mock LLM Client - Offline stand-in for local development.
Answers plan requests from the bundled fallback pools, no network calls.
"""
import re
import json
import logging
from typing import Optional

from .sanitizer import FallbackPools, TIME_SLOTS

logger = logging.getLogger(__name__)


class MockLLMClient:
    """
    Deterministic mock LLM.
    Source of truth: resources/fallback_pools.json
    """

    def __init__(self):
        self.model = "mock-offline"

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False
    ) -> str:
        """Answer a plan request from the resource pools."""
        user_msg = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")
        return json.dumps(self._generate_plan(user_msg))

    def _generate_plan(self, prompt: str) -> dict:
        dest_match = re.search(r'destination="([^"]*)"', prompt)
        destination = dest_match.group(1) if dest_match else "your destination"

        dates_match = re.search(r"these dates: ([0-9, -]+)\.", prompt)
        dates = [d.strip() for d in dates_match.group(1).split(",")] if dates_match else []

        pools = FallbackPools.for_destination(destination)
        logger.info(f"Mock plan for {destination} ({len(dates)} days)")

        days = []
        for i, day in enumerate(dates):
            titles = pools.attractions[i * 2:i * 2 + 4] or pools.attractions[:4]
            days.append({
                "date": day,
                "plan": [
                    {"time": time, "title": title, "note": "Offline suggestion"}
                    for time, title in zip(TIME_SLOTS, titles)
                ],
            })

        return {
            "summary": f"Offline plan for {destination}",
            "days": days,
            "checkpoints": [{"name": name, "why": "Popular spot"} for name in pools.attractions[:3]],
            "hotels": [{"name": name, "note": "Good base area"} for name in pools.stays],
            "restaurants": [{"name": name, "note": "Popular choice"} for name in pools.eats],
            "transports": [],
            "tips": pools.tips,
            "similarPlaces": [],
        }
