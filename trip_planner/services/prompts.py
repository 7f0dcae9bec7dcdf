"""
Prompt construction for the trip plan request.
"""
from ..models.trip_form import TripForm


PLANNER_SYSTEM_PROMPT = """You are a travel itinerary planner. Build a DISTINCT, non-repeating trip plan.

OUTPUT FORMAT - Return STRICT JSON only (no markdown):
{
  "summary": "one line",
  "days": [
    { "date": "YYYY-MM-DD", "plan": [
      { "time": "09:00", "title": "Place or activity", "note": "short tip" }
    ]}
  ],
  "checkpoints": [{ "name": "Popular spot", "why": "short reason" }],
  "hotels": [{ "name": "Hotel", "note": "why it fits the budget", "googleQuery": "Hotel name and city" }],
  "restaurants": [{ "name": "Restaurant", "note": "why", "googleQuery": "Restaurant and city" }],
  "transports": [{ "mode": "flight/train/bus/taxi", "note": "when to use", "googleQuery": "Flights origin to destination" }],
  "costHints": { "stayPerNightHintINR": 0, "foodPerAdultPerDayINR": 0, "attractionsPerAdultINR": 0 },
  "tips": ["compact bullets (no live weather)"],
  "similarPlaces": [{ "place": "Similar city", "why": "vibe/budget similarity" }]
}"""


def build_plan_messages(form: TripForm, dates: list[str]) -> list[dict]:
    """Build the chat messages asking the model for a plan covering ``dates``."""
    adults = form.travelers.adults
    kids = form.travelers.kids
    budget = form.budget.value

    rules = [
        f"- Create a day for EACH of these dates: {', '.join(dates)}.",
        "- ABSOLUTELY NO REPEATED titles across all days. Vary neighborhoods/themes.",
        "- Per day: include a landmark walk, a cultural stop, a nature/activity block, "
        "a viewpoint/sunset, and two food breaks (lunch & dinner).",
        f"- If kids > 0 ({kids}), add family-friendly notes/breaks.",
        f'- Respect budget "{budget}" in notes. Max 6 items per day. Keep notes short.',
        f'- Hotel googleQuery values should read "<hotel name> {form.destination}".',
    ]
    if form.origin:
        rules.append(f'- Transport googleQuery values should read "Flights {form.origin} to {form.destination}".')

    user_prompt = f"""RULES:
{chr(10).join(rules)}

INPUTS: origin="{form.origin}", destination="{form.destination}", domestic={str(form.domestic).lower()}, adults={adults}, kids={kids}.

Generate the plan now."""

    return [
        {"role": "system", "content": PLANNER_SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]
