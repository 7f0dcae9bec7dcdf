"""
Plan Sanitizer - turns raw (possibly messy) model output into a clean plan.

The model is asked not to repeat itself, but it often does: the same sight
shows up on several days, restaurants double as attractions, whole days go
missing. Everything here is pure and deterministic: the raw dict is mined
for titles, merged with static fallback pools, and re-dealt across the trip
dates so that no title appears twice and every day has at most six stops.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import settings
from ..models.trip_form import TripForm
from ..models.plan import (
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

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

TIME_SLOTS = ["09:00", "11:30", "14:30", "16:30", "19:30", "21:00"]
MAX_ITEMS_PER_DAY = 6
ATTRACTIONS_PER_DAY = 4
EATS_PER_DAY = 2
MAX_HOTELS = 6
MAX_RESTAURANTS = 6

# Slot order for one day: (source list, note)
DAY_LAYOUT = [
    ("attraction", "Morning highlights"),
    ("attraction", "Short visit"),
    ("eat", "Local lunch"),
    ("attraction", "Light activity"),
    ("attraction", "Golden hour photos"),
    ("eat", "Dinner — reserve if needed"),
]

RESOURCE_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "resources", "fallback_pools.json"
)


def norm(s: Optional[str]) -> str:
    """Normalize a title for comparison."""
    return (s or "").strip().lower()


def dedupe(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Remove duplicates by key, preserving order. Items with an empty key are dropped."""
    seen = set()
    out = []
    for item in items:
        k = key(item)
        if not k or k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out


def rotate(items: list[T], n: int) -> list[T]:
    """Rotate a list left by n positions."""
    if not items:
        return items
    n %= len(items)
    return items[n:] + items[:n]


def range_dates(start_iso: str, end_iso: str, limit: Optional[int] = None) -> list[str]:
    """Inclusive list of ISO dates between start and end; [] if either is invalid."""
    try:
        start = date.fromisoformat((start_iso or "").strip())
        end = date.fromisoformat((end_iso or "").strip())
    except ValueError:
        return []

    out = []
    current = start
    while current <= end:
        if limit is not None and len(out) >= limit:
            logger.warning(f"Trip range {start_iso}..{end_iso} capped at {limit} days")
            break
        out.append(current.isoformat())
        current += timedelta(days=1)
    return out


@dataclass
class FallbackPools:
    """Static attractions, eateries and stays used when the model falls short."""
    attractions: list[str] = field(default_factory=list)
    eats: list[str] = field(default_factory=list)
    stays: list[str] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)

    @classmethod
    def for_destination(cls, destination: str, data: Optional[dict] = None) -> "FallbackPools":
        """Pick the destination-specific pools if any match, else the generic ones."""
        if data is None:
            data = load_pool_data()
        city = norm(destination)
        chosen = data.get("default", {})
        for entry in data.get("destinations", []):
            if entry.get("match") and entry["match"] in city:
                chosen = entry
                break
        return cls(
            attractions=list(chosen.get("attractions", [])),
            eats=list(chosen.get("eats", [])),
            stays=list(chosen.get("stays", [])),
            tips=list(data.get("tips", [])),
        )


_pool_data: Optional[dict] = None


def load_pool_data() -> dict:
    """Load (once) the bundled fallback pool resource."""
    global _pool_data
    if _pool_data is None:
        try:
            with open(RESOURCE_PATH, "r", encoding="utf-8") as f:
                _pool_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading fallback pools from {RESOURCE_PATH}: {e}")
            _pool_data = {}
    return _pool_data


def build_varied_day(
    day: str,
    picks: list[str],
    eats: list[str],
    pools: FallbackPools,
    used: Optional[set[str]] = None,
) -> DayPlan:
    """
    Lay out one day over the fixed time slots.

    Picks fill the attraction slots and eats the two meal slots; a slot is
    skipped when its list runs out. Short days are backfilled from the
    fallback pools, alternating attraction/eatery, skipping any title already
    in ``used`` (the trip-wide set, updated in place).
    """
    if used is None:
        used = set()
    plan: list[PlanItem] = []
    sources = {"attraction": iter(picks), "eat": iter(eats)}

    for (kind, note), time in zip(DAY_LAYOUT, TIME_SLOTS):
        title = next(sources[kind], None)
        if not title:
            continue
        used.add(norm(title))
        plan.append(PlanItem(time=time, title=title, note=note))

    # Backfill if short
    slot = 0
    while len(plan) < MAX_ITEMS_PER_DAY and slot < 12:
        pool = pools.attractions if slot % 2 == 0 else pools.eats
        index = slot // 2
        title = pool[index] if index < len(pool) else None
        if title and norm(title) not in used:
            plan.append(PlanItem(
                time=TIME_SLOTS[min(len(plan), len(TIME_SLOTS) - 1)],
                title=title,
                note="Short stop" if slot % 2 == 0 else "Quick bite",
            ))
            used.add(norm(title))
        slot += 1

    return DayPlan(date=day, plan=plan[:MAX_ITEMS_PER_DAY])


def attach_stays(days: list[DayPlan], hotels: list[Hotel]) -> list[DayPlan]:
    """Rotate stays so each night suggests a different hotel."""
    unique = dedupe(hotels, lambda h: norm(h.name))
    if not unique:
        return days
    return [
        day.model_copy(update={"stay_tonight": unique[i % len(unique)].name})
        for i, day in enumerate(days)
    ]


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _records(raw: list, model: type[M]) -> list[M]:
    """Validate raw dicts into models, dropping anything unusable."""
    out = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        data = {k: v for k, v in item.items() if v is not None}
        try:
            out.append(model.model_validate(data))
        except ValidationError as e:
            logger.debug(f"Dropping invalid {model.__name__}: {e.error_count()} errors")
    return out


def _with_query(records: list[M], destination: str) -> list[M]:
    """Fill in a Google search query for records the model left without one."""
    return [
        r if r.google_query else r.model_copy(update={"google_query": f"{r.name} {destination}"})
        for r in records
    ]


def _titles(raw_days: list) -> list[str]:
    titles = []
    for day in raw_days:
        if not isinstance(day, dict):
            continue
        for item in _as_list(day.get("plan")):
            if isinstance(item, dict) and item.get("title"):
                titles.append(str(item["title"]))
    return titles


def _names(raw: list) -> list[str]:
    return [str(r["name"]) for r in raw if isinstance(r, dict) and r.get("name")]


def _cost_hints(raw: Any) -> CostHints:
    if isinstance(raw, dict):
        try:
            return CostHints.model_validate(raw)
        except ValidationError:
            logger.debug("Ignoring invalid cost hints from model")
    return CostHints()


def sanitize_plan(
    raw: dict,
    form: TripForm,
    today: Optional[date] = None,
    max_days: Optional[int] = None,
    pools: Optional[FallbackPools] = None,
    dates: Optional[list[str]] = None,
) -> AIPlan:
    """
    Build a distinct, day-partitioned plan from raw model output.

    Args:
        raw: Parsed model response (may be empty or partially malformed)
        form: The trip brief the plan belongs to
        today: Date used when the form's dates are unusable
        max_days: Cap on the number of generated days (defaults to MAX_TRIP_DAYS)
        pools: Fallback pools (defaults to the bundled ones for the destination)
        dates: Dates to plan for, already computed by the caller (overrides the form range)

    Returns:
        AIPlan with no repeated titles across days and at most six items per day
    """
    if not isinstance(raw, dict):
        raw = {}
    destination = form.destination
    if pools is None:
        pools = FallbackPools.for_destination(destination)

    if not dates:
        if max_days is None:
            max_days = settings.max_trip_days
        dates = range_dates(form.start_date, form.end_date, limit=max_days)
    if not dates:
        dates = [(today or date.today()).isoformat()]

    raw_days = _as_list(raw.get("days"))
    raw_hotels = _as_list(raw.get("hotels"))
    raw_restaurants = _as_list(raw.get("restaurants"))

    # Build attraction/food pools from AI + fallbacks, deduped
    attraction_pool = dedupe(_titles(raw_days) + pools.attractions, norm)
    eat_pool = dedupe(_names(raw_restaurants) + pools.eats, norm)

    used: set[str] = set()
    days: list[DayPlan] = []
    for day in dates:
        picks = []
        for title in attraction_pool:
            if len(picks) >= ATTRACTIONS_PER_DAY:
                break
            if norm(title) not in used:
                picks.append(title)
                used.add(norm(title))

        eats = []
        for title in eat_pool:
            if len(eats) >= EATS_PER_DAY:
                break
            if norm(title) not in used:
                eats.append(title)
                used.add(norm(title))

        # next day starts from different positions
        attraction_pool = rotate(attraction_pool, 3)
        eat_pool = rotate(eat_pool, 2)

        days.append(build_varied_day(day, picks, eats, pools, used))

    hotels = _with_query(
        dedupe(_records(raw_hotels, Hotel), lambda h: norm(h.name))[:MAX_HOTELS],
        destination,
    )
    if not hotels:
        hotels = [
            Hotel(name=name, note="Good base area", google_query=f"{name} {destination}")
            for name in pools.stays
        ]

    restaurants = _with_query(
        dedupe(_records(raw_restaurants, Restaurant), lambda r: norm(r.name))[:MAX_RESTAURANTS],
        destination,
    )
    if not restaurants:
        restaurants = [
            Restaurant(name=name, note="Popular choice", google_query=f"{name} {destination}")
            for name in pools.eats[:MAX_RESTAURANTS]
        ]

    summary = raw.get("summary")
    return AIPlan(
        summary=summary if isinstance(summary, str) and summary.strip() else f"Trip plan for {destination}",
        days=attach_stays(days, hotels),
        checkpoints=_records(_as_list(raw.get("checkpoints")), Checkpoint),
        hotels=hotels,
        restaurants=restaurants,
        transports=_records(_as_list(raw.get("transports")), Transport),
        cost_hints=_cost_hints(raw.get("costHints")),
        tips=[t for t in _as_list(raw.get("tips")) if isinstance(t, str) and t.strip()],
        similar_places=_records(_as_list(raw.get("similarPlaces")), SimilarPlace),
    )
