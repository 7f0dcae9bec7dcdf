"""Data models for trip planner."""
from .trip_form import TripForm, Travelers, BudgetTier
from .plan import (
    AIPlan,
    DayPlan,
    PlanItem,
    Checkpoint,
    Hotel,
    Restaurant,
    Transport,
    CostHints,
    SimilarPlace,
)

__all__ = [
    "TripForm",
    "Travelers",
    "BudgetTier",
    "AIPlan",
    "DayPlan",
    "PlanItem",
    "Checkpoint",
    "Hotel",
    "Restaurant",
    "Transport",
    "CostHints",
    "SimilarPlace",
]
