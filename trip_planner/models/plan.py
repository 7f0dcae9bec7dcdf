"""
Plan models - Sanitized itinerary output returned to the client.
Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class PlanModel(BaseModel):
    """Base for plan records: accepts both wire and Python field names."""
    model_config = ConfigDict(populate_by_name=True)


class PlanItem(PlanModel):
    """A single timed stop in a day."""
    time: str = Field(..., description="Start time, e.g. '09:00'")
    title: str = Field(..., description="Place or activity")
    note: Optional[str] = Field(None, description="Short tip")


class DayPlan(PlanModel):
    """Plan for a single date."""
    date: str = Field(..., description="Date for this day (YYYY-MM-DD)")
    plan: list[PlanItem] = Field(default_factory=list)
    stay_tonight: Optional[str] = Field(
        None,
        alias="stayTonight",
        description="Suggested hotel for the night"
    )


class Checkpoint(PlanModel):
    """A popular spot worth seeing."""
    name: str
    why: Optional[str] = None


class Hotel(PlanModel):
    """A suggested place to stay."""
    name: str
    note: Optional[str] = None
    google_query: str = Field("", alias="googleQuery")


class Restaurant(PlanModel):
    """A suggested place to eat."""
    name: str
    note: Optional[str] = None
    google_query: str = Field("", alias="googleQuery")


class Transport(PlanModel):
    """A way of getting there or around."""
    mode: str
    note: Optional[str] = None
    google_query: str = Field("", alias="googleQuery")


class CostHints(PlanModel):
    """Model-provided cost hints in INR."""
    stay_per_night_hint_inr: float = Field(0, ge=0, alias="stayPerNightHintINR")
    food_per_adult_per_day_inr: float = Field(0, ge=0, alias="foodPerAdultPerDayINR")
    attractions_per_adult_inr: float = Field(0, ge=0, alias="attractionsPerAdultINR")


class SimilarPlace(PlanModel):
    """A destination with a similar vibe or budget."""
    place: str
    why: Optional[str] = None


class AIPlan(PlanModel):
    """Complete sanitized trip plan."""
    summary: str = ""
    days: list[DayPlan] = Field(default_factory=list)
    checkpoints: list[Checkpoint] = Field(default_factory=list)
    hotels: list[Hotel] = Field(default_factory=list)
    restaurants: list[Restaurant] = Field(default_factory=list)
    transports: list[Transport] = Field(default_factory=list)
    cost_hints: CostHints = Field(default_factory=CostHints, alias="costHints")
    tips: list[str] = Field(default_factory=list)
    similar_places: list[SimilarPlace] = Field(default_factory=list, alias="similarPlaces")

    def all_titles(self) -> list[str]:
        """Every item title across all days, in order."""
        return [item.title for day in self.days for item in day.plan]
