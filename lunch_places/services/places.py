from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import aiohttp
from pydantic import ValidationError

from lunch_places.config import FALLBACK_RADIUS_M, Settings
from lunch_places.errors import UpstreamSearchError
from lunch_places.models import Candidate, Location, NearbyPlace, NearbySearchResponse, TravelMode
from lunch_places.result import Failure, Ok, Result
from lunch_places.services.upstream import fetch_json, provider_details

logger = logging.getLogger(__name__)

# (max minutes inclusive, radius in meters); anything longer uses the last radius.
RADIUS_BREAKPOINTS: dict[TravelMode, list[Tuple[float, int]]] = {
    TravelMode.walking: [(10, 1_000), (20, 2_000), (30, 3_500), (float("inf"), 4_000)],
    TravelMode.driving: [(10, 8_000), (20, 15_000), (30, 25_000), (float("inf"), 25_000)],
}


def search_radius_m(
    travel_mode: Optional[TravelMode],
    minutes: Optional[float],
    *,
    fallback_m: int = FALLBACK_RADIUS_M,
) -> int:
    """Pick the Nearby Search radius for a travel mode and time budget.

    Without both a mode and a budget the flat fallback radius is used.
    """
    if travel_mode is None or minutes is None:
        return fallback_m
    breakpoints = RADIUS_BREAKPOINTS[TravelMode(travel_mode)]
    for max_minutes, radius in breakpoints:
        if minutes <= max_minutes:
            return radius
    return breakpoints[-1][1]


def _to_candidate(raw: Any) -> Optional[Candidate]:
    try:
        place = NearbyPlace.model_validate(raw)
    except ValidationError:
        return None
    if not place.name or place.geometry is None:
        return None
    point = place.geometry.location
    try:
        location = Location(latitude=point.lat, longitude=point.lng)
    except ValidationError:
        return None
    open_now = place.opening_hours.open_now if place.opening_hours else None
    return Candidate(name=place.name, location=location, is_open_now=open_now)


def parse_nearby_response(payload: Any, *, limit: int = 20) -> Result[List[Candidate]]:
    """Build candidates from a Nearby Search page, keeping provider order."""
    try:
        doc = NearbySearchResponse.model_validate(payload)
    except ValidationError as e:
        return Failure(UpstreamSearchError(details=f"Malformed nearby search response: {e.error_count()} error(s)"))

    if doc.status != "OK":
        # ZERO_RESULTS and provider-side refusals both yield an empty page.
        if doc.status != "ZERO_RESULTS":
            logger.warning("Nearby search returned %s", provider_details(doc.status, doc.error_message))
        return Ok([])

    candidates: List[Candidate] = []
    for raw in doc.results:
        candidate = _to_candidate(raw)
        if candidate is None:
            logger.debug("Skipping nearby result without name or coordinates")
            continue
        candidates.append(candidate)
        if len(candidates) >= limit:
            break
    return Ok(candidates)


async def find_candidates(
    session: aiohttp.ClientSession,
    origin: Location,
    radius_m: int,
    *,
    settings: Settings,
    category: str = "restaurant",
) -> Result[List[Candidate]]:
    fetched = await fetch_json(
        session,
        str(settings.nearby_search_url),
        {"location": origin.as_param(), "radius": radius_m, "type": category},
        settings=settings,
        error_cls=UpstreamSearchError,
    )
    if isinstance(fetched, Failure):
        return fetched

    result = parse_nearby_response(fetched.value, limit=settings.max_candidates)
    if isinstance(result, Ok):
        logger.debug(
            "Nearby search: origin=%s radius_m=%d category=%s got %d candidates",
            origin.as_param(),
            radius_m,
            category,
            len(result.value),
        )
    return result
