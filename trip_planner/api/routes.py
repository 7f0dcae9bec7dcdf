"""
API Routes for Trip Planner.
"""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from ..errors import LLMConfigurationError
from ..models.trip_form import TripForm
from ..models.plan import AIPlan
from ..services.planner import get_planner
from ..services.photos import (
    CACHE_FALLBACK,
    CACHE_RESOLVED,
    DEFAULT_HEIGHT,
    DEFAULT_QUERY,
    DEFAULT_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
    parse_dimension,
    photo_resolver,
    placeholder_url,
)
from ..services.trip_view import (
    DEFAULT_INTERESTS,
    Intensity,
    Interest,
    TripOverview,
    build_overview,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trip-planner"])


# Request Models
class OverviewRequest(BaseModel):
    form: TripForm
    plan: Optional[AIPlan] = None
    intensity: Intensity = Intensity.STANDARD
    interests: list[Interest] = Field(default_factory=lambda: list(DEFAULT_INTERESTS))


# Endpoints

@router.post("/ai/plan", response_model=AIPlan)
async def generate_plan(form: TripForm):
    """Generate a sanitized day-by-day plan for the trip brief."""
    try:
        planner = get_planner()
    except LLMConfigurationError as e:
        logger.error(f"Planner unavailable: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return await planner.generate(form)


@router.get("/photo")
async def photo(q: Optional[str] = None, w: Optional[str] = None, h: Optional[str] = None):
    """Redirect to an image for the query; never a broken image."""
    query = (q or DEFAULT_QUERY).strip() or DEFAULT_QUERY
    width = parse_dimension(w, DEFAULT_WIDTH, MIN_WIDTH)
    height = parse_dimension(h, DEFAULT_HEIGHT, MIN_HEIGHT)

    try:
        url = await photo_resolver.resolve(query, width, height)
        cache = CACHE_RESOLVED
    except asyncio.TimeoutError:
        logger.warning(f"Photo lookup for '{query}' timed out")
        url, cache = placeholder_url(width, height, query), CACHE_FALLBACK
    except Exception as e:
        logger.error(f"Photo lookup for '{query}' failed: {e}")
        url, cache = placeholder_url(width, height, query), CACHE_FALLBACK

    return RedirectResponse(url, status_code=302, headers={"Cache-Control": cache})


@router.post("/trip/overview", response_model=TripOverview)
async def trip_overview(request: OverviewRequest):
    """Costs, refined days, packing list and links for a trip."""
    return build_overview(
        form=request.form,
        plan=request.plan,
        intensity=request.intensity,
        interests=request.interests,
    )
