from __future__ import annotations

import logging
from typing import Any, List, Sequence

import aiohttp
from pydantic import ValidationError

from lunch_places.config import Settings
from lunch_places.errors import UpstreamEstimationError
from lunch_places.models import DistanceMatrixResponse, Location, TravelEstimate, TravelMode
from lunch_places.result import Failure, Ok, Result
from lunch_places.services.upstream import fetch_json, provider_details

logger = logging.getLogger(__name__)


def minutes_to_seconds(minutes: float) -> float:
    return minutes * 60


def parse_distance_matrix(payload: Any, destination_count: int) -> Result[List[TravelEstimate]]:
    """Read the single origin row of a Distance Matrix document.

    Elements that could not be routed come back with ``duration_seconds=None``.
    """
    try:
        doc = DistanceMatrixResponse.model_validate(payload)
    except ValidationError as e:
        return Failure(UpstreamEstimationError(details=f"Malformed distance matrix response: {e.error_count()} error(s)"))

    if doc.status != "OK":
        return Failure(UpstreamEstimationError(details=provider_details(doc.status, doc.error_message)))
    if not doc.rows:
        return Failure(UpstreamEstimationError(details="Distance matrix response has no rows."))

    elements = doc.rows[0].elements
    if len(elements) != destination_count:
        return Failure(
            UpstreamEstimationError(
                details=f"Expected {destination_count} elements, got {len(elements)}."
            )
        )

    estimates: List[TravelEstimate] = []
    for index, element in enumerate(elements):
        duration = element.duration.value if element.status == "OK" and element.duration else None
        estimates.append(TravelEstimate(candidate_index=index, duration_seconds=duration))
    return Ok(estimates)


async def estimate_travel_times(
    session: aiohttp.ClientSession,
    origin: Location,
    destinations: Sequence[Location],
    travel_mode: TravelMode,
    *,
    settings: Settings,
) -> Result[List[TravelEstimate]]:
    if not destinations:
        return Ok([])

    fetched = await fetch_json(
        session,
        str(settings.distance_matrix_url),
        {
            "origins": origin.as_param(),
            "destinations": "|".join(d.as_param() for d in destinations),
            "mode": TravelMode(travel_mode).value,
        },
        settings=settings,
        error_cls=UpstreamEstimationError,
    )
    if isinstance(fetched, Failure):
        return fetched

    result = parse_distance_matrix(fetched.value, len(destinations))
    if isinstance(result, Failure):
        logger.error("Travel time estimation failed: %s", result.error.details)
    else:
        routed = sum(1 for e in result.value if e.duration_seconds is not None)
        logger.debug("Distance matrix: %d of %d destinations routable", routed, len(destinations))
    return result
