"""
Heuristic trip cost estimate in INR.
"""
import math
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.trip_form import BudgetTier, Travelers


# Per room per night
STAY_PER_NIGHT_INR = {
    BudgetTier.CHEAP: 1800,
    BudgetTier.VALUE: 3200,
    BudgetTier.TOP: 6000,
}

# Per adult per day
FOOD_PER_DAY_INR = {
    BudgetTier.CHEAP: 500,
    BudgetTier.VALUE: 900,
    BudgetTier.TOP: 1500,
}

LOCAL_INR_PER_KM = 25
DEFAULT_LOCAL_KM = 40
ATTRACTIONS_PER_ADULT_INR = 1200
KID_FOOD_FACTOR = 0.6
KID_ATTRACTION_FACTOR = 0.5
BUFFER_RATE = 0.12


class CostItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    amount_inr: float = Field(..., alias="amountINR")
    category: Literal["transport", "stay", "food", "attractions", "local", "buffer"]


class CostEstimate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[CostItem]
    total: float
    per_person: float = Field(..., alias="perPerson")


def estimate_costs_inr(
    nights: int,
    travelers: Travelers,
    budget: BudgetTier,
    flight_median_inr: Optional[float] = None,
    stay_nightly_inr: Optional[float] = None,
    rooms: Optional[int] = None,
    km_local: Optional[float] = None,
    attraction_inr: Optional[float] = None,
) -> CostEstimate:
    """
    Rough cost breakdown for the trip.

    Rooms default to one per two adults; food is charged per day including
    the travel day (nights + 1) with kids at 60%. A 12% buffer is added on top.
    """
    budget = BudgetTier(budget)
    adults, kids = travelers.adults, travelers.kids
    if rooms is None:
        rooms = max(1, math.ceil(adults / 2))

    nightly = STAY_PER_NIGHT_INR[budget] if stay_nightly_inr is None else stay_nightly_inr
    stay = nightly * nights * rooms
    flight = flight_median_inr or 0
    food = FOOD_PER_DAY_INR[budget] * (adults + KID_FOOD_FACTOR * kids) * (nights + 1)
    local = (DEFAULT_LOCAL_KM if km_local is None else km_local) * LOCAL_INR_PER_KM
    if attraction_inr is None:
        attraction_inr = ATTRACTIONS_PER_ADULT_INR * (adults + KID_ATTRACTION_FACTOR * kids)
    buffer = (flight + stay + food + local + attraction_inr) * BUFFER_RATE

    items = [
        CostItem(label="Flights", amount_inr=flight, category="transport"),
        CostItem(label="Stay", amount_inr=stay, category="stay"),
        CostItem(label="Food", amount_inr=food, category="food"),
        CostItem(label="Local commute", amount_inr=local, category="local"),
        CostItem(label="Attractions", amount_inr=attraction_inr, category="attractions"),
        CostItem(label="Buffer (12%)", amount_inr=buffer, category="buffer"),
    ]
    total = sum(item.amount_inr for item in items)
    return CostEstimate(
        items=items,
        total=total,
        per_person=total / (travelers.total or 1),
    )


def safe_nights(start_iso: str, end_iso: str) -> int:
    """Nights between two ISO dates; 1 when either is invalid or the range is empty."""
    try:
        start = date.fromisoformat((start_iso or "").strip())
        end = date.fromisoformat((end_iso or "").strip())
    except ValueError:
        return 1
    nights = (end - start).days
    return nights if nights > 0 else 1
