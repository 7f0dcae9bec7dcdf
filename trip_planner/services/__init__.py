"""Services for trip planner."""
from .llm_client import LLMClient
from .planner import TripPlanner
from .photos import PhotoResolver
from .sanitizer import sanitize_plan

__all__ = [
    "LLMClient",
    "TripPlanner",
    "PhotoResolver",
    "sanitize_plan",
]
