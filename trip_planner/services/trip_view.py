"""
Trip Overview - everything a trip page shows besides the raw plan:
costs, interest-ranked days, packing list, outbound links, plain-text export.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .costs import CostEstimate, estimate_costs_inr, safe_nights
from .deeplinks import (
    attractions_link,
    gmaps_directions_link,
    google_images_link,
    google_flights_search,
    hotels_link,
    restaurants_link,
)
from .formatting import money_inr, to_dmy
from .sanitizer import sanitize_plan
from ..models.trip_form import TripForm
from ..models.plan import AIPlan, DayPlan


class Intensity(str, Enum):
    """How full each day should be."""
    RELAXED = "relaxed"
    STANDARD = "standard"
    PACKED = "packed"


class Interest(str, Enum):
    CULTURE = "culture"
    NATURE = "nature"
    FOOD = "food"
    SHOPPING = "shopping"
    ADVENTURE = "adventure"
    KIDS = "kids"


MAX_ITEMS_BY_INTENSITY = {
    Intensity.RELAXED: 4,
    Intensity.STANDARD: 6,
    Intensity.PACKED: 9,
}

INTEREST_KEYWORDS = {
    Interest.CULTURE: ["museum", "temple", "church", "palace", "heritage", "gallery", "historic", "fort"],
    Interest.NATURE: ["park", "garden", "beach", "lake", "waterfall", "trail", "forest", "viewpoint", "valley"],
    Interest.FOOD: ["cafe", "restaurant", "street food", "brew", "diner", "eatery"],
    Interest.SHOPPING: ["market", "bazaar", "mall", "shopping", "souvenir"],
    Interest.ADVENTURE: ["trek", "zip", "rafting", "surf", "climb", "paragliding", "kayak", "ski"],
    Interest.KIDS: ["aquarium", "zoo", "theme park", "toy", "science", "play"],
}

DEFAULT_INTERESTS = [Interest.CULTURE, Interest.FOOD]


class TripLinks(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hotels: str
    restaurants: str
    attractions: str
    images: str
    flights: Optional[str] = None
    directions: Optional[str] = None


class TripOverview(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slug: str
    date_range: str
    nights: int
    costs: CostEstimate
    cost_text: str
    days: list[DayPlan]
    packing_list: list[str]
    links: TripLinks
    itinerary_text: str


def interest_score(title: str, interests: list[Interest]) -> int:
    """Number of selected interests whose keywords appear in the title."""
    t = (title or "").lower()
    return sum(
        1 for interest in interests
        if any(keyword in t for keyword in INTEREST_KEYWORDS[interest])
    )


def refine_days(days: list[DayPlan], intensity: Intensity, interests: list[Interest]) -> list[DayPlan]:
    """Rank each day's stops by interest match and clamp them to the intensity."""
    limit = MAX_ITEMS_BY_INTENSITY[intensity]
    refined = []
    for day in days:
        # sorted() is stable, so ties keep the planned order
        ranked = sorted(day.plan, key=lambda item: -interest_score(item.title, interests))
        refined.append(day.model_copy(update={"plan": ranked[:limit]}))
    return refined


def make_packing_list(
    nights: int,
    adults: int,
    kids: int,
    intensity: Intensity,
    interests: list[Interest],
) -> list[str]:
    items = [
        "Passport/ID, tickets, wallet",
        "Phone + charger + power bank",
        "Light jacket / rain layer",
        "Comfortable shoes + spare socks",
        "Med kit (pain relief, band-aids, personal meds)",
        "Reusable water bottle",
    ]
    if kids > 0:
        items += ["Snacks for kids", "Wipes/tissues", "Small games/books"]
    if Interest.NATURE in interests:
        items += ["Sunscreen", "Hat/sunglasses"]
    if Interest.ADVENTURE in interests:
        items += ["Sports shoes", "Dry bag", "Action camera (optional)"]
    items += ["Travel adapter", "Camera (optional)"]
    if nights >= 3:
        items.append("Laundry bag")
    if intensity == Intensity.PACKED:
        items += ["Electrolyte sachets", "Band-aids for blisters"]
    return items


def itinerary_text(form: TripForm, days: list[DayPlan]) -> str:
    """Plain-text itinerary suitable for copying or sharing."""
    header = (
        f"{form.destination} ({form.start_date or 'Start'} → {form.end_date or 'End'}) — "
        f"{form.travelers.adults} adults, {form.travelers.kids} kids\n\n"
    )
    blocks = []
    for i, day in enumerate(days, start=1):
        lines = [f"Day {i} — {day.date}"]
        for item in day.plan:
            note = f" — {item.note}" if item.note else ""
            lines.append(f"  {item.time}  {item.title}{note}")
        blocks.append("\n".join(lines))
    return header + ("\n\n".join(blocks) or "No itinerary yet.")


def cost_summary_text(estimate: CostEstimate) -> str:
    """Plain-text cost breakdown."""
    lines = ["Estimated Costs"]
    lines += [f"{item.label}: {money_inr(item.amount_inr)}" for item in estimate.items]
    lines.append(f"Total: {money_inr(estimate.total)}")
    lines.append(f"≈ {money_inr(estimate.per_person)} per person")
    return "\n".join(lines)


def date_range_text(form: TripForm) -> str:
    """'14/03/2025 → 16/03/2025', with placeholders for missing dates."""
    start = to_dmy(form.start_date) if form.start_date else "Start"
    end = to_dmy(form.end_date) if form.end_date else "End"
    return f"{start} → {end}"


def trip_links(form: TripForm) -> TripLinks:
    links = TripLinks(
        hotels=hotels_link(form.destination),
        restaurants=restaurants_link(form.destination),
        attractions=attractions_link(form.destination),
        images=google_images_link(form.destination),
    )
    if form.origin:
        links.flights = google_flights_search(form.origin, form.destination, form.start_date or None)
        if form.domestic:
            links.directions = gmaps_directions_link(form.origin, form.destination, "driving")
    return links


def build_overview(
    form: TripForm,
    plan: Optional[AIPlan] = None,
    intensity: Intensity = Intensity.STANDARD,
    interests: Optional[list[Interest]] = None,
) -> TripOverview:
    """
    Combine cost estimate, refined days, packing list and links for a trip.

    Without a plan (or with an empty one) the days come from the fallback
    pools, so the overview is always populated.
    """
    if interests is None:
        interests = list(DEFAULT_INTERESTS)
    nights = safe_nights(form.start_date, form.end_date)

    if plan and plan.days:
        base_days = plan.days
    else:
        base_days = sanitize_plan({}, form).days
    days = refine_days(base_days, intensity, interests)
    costs = estimate_costs_inr(nights, form.travelers, form.budget)

    return TripOverview(
        slug=form.slug,
        date_range=date_range_text(form),
        nights=nights,
        costs=costs,
        cost_text=cost_summary_text(costs),
        days=days,
        packing_list=make_packing_list(
            nights=nights,
            adults=form.travelers.adults,
            kids=form.travelers.kids,
            intensity=intensity,
            interests=interests,
        ),
        links=trip_links(form),
        itinerary_text=itinerary_text(form, days),
    )
