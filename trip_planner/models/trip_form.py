"""
Trip Form - The short trip brief submitted by the user.
Held only for the duration of a request; nothing is persisted.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


class BudgetTier(str, Enum):
    """Budget presets driving the heuristic cost constants."""
    CHEAP = "cheap"
    VALUE = "value"
    TOP = "top"


class Travelers(BaseModel):
    """Traveler head count."""
    adults: int = Field(
        default=2, ge=1, le=50,
        description="Number of adults"
    )
    kids: int = Field(
        default=0, ge=0, le=50,
        description="Number of children"
    )

    @property
    def total(self) -> int:
        return self.adults + self.kids


class TripForm(BaseModel):
    """
    Trip brief - origin, destination, dates, travelers and budget tier.
    Dates are kept as ISO strings; unparsable values are handled downstream.
    """
    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(
        default="",
        description="Where the trip starts"
    )
    destination: str = Field(
        ...,
        description="City or country to visit"
    )
    domestic: bool = Field(
        default=True,
        description="Whether the trip stays within the home country"
    )
    start_date: str = Field(
        default="",
        alias="startDate",
        description="Trip start date (YYYY-MM-DD)"
    )
    end_date: str = Field(
        default="",
        alias="endDate",
        description="Trip end date (YYYY-MM-DD)"
    )
    travelers: Travelers = Field(
        default_factory=Travelers,
        description="Adults and kids travelling"
    )
    budget: BudgetTier = Field(
        default=BudgetTier.VALUE,
        description="Budget tier"
    )

    @field_validator("origin", "start_date", "end_date", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("destination", mode="before")
    @classmethod
    def validate_destination(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("destination is required")
        return str(v).strip()

    @property
    def slug(self) -> str:
        """URL slug for the destination, e.g. 'old-manali'."""
        return "-".join(self.destination.lower().split())
