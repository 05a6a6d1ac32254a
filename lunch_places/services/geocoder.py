from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from lunch_places.config import Settings
from lunch_places.errors import UpstreamGeocodeError
from lunch_places.models import GeocodeResponse, Location
from lunch_places.result import Failure, Ok, Result
from lunch_places.services.upstream import fetch_json, provider_details

logger = logging.getLogger(__name__)


def parse_geocode_response(payload: Any) -> Result[Location]:
    """Turn a Geocoding API document into the first matching Location."""
    try:
        doc = GeocodeResponse.model_validate(payload)
    except ValidationError as e:
        return Failure(UpstreamGeocodeError(details=f"Malformed geocode response: {e.error_count()} error(s)"))

    if doc.status == "ZERO_RESULTS" or (doc.status == "OK" and not doc.results):
        return Failure(UpstreamGeocodeError("Location not found for zip code.", status_code=404))
    if doc.status != "OK":
        return Failure(UpstreamGeocodeError(details=provider_details(doc.status, doc.error_message)))

    # First result only; no disambiguation.
    point = doc.results[0].geometry.location
    try:
        return Ok(Location(latitude=point.lat, longitude=point.lng))
    except ValidationError:
        return Failure(UpstreamGeocodeError(details=f"Coordinates out of range: {point.lat}, {point.lng}"))


async def geocode_zip(session: aiohttp.ClientSession, zip_code: str, *, settings: Settings) -> Result[Location]:
    fetched = await fetch_json(
        session,
        str(settings.geocode_url),
        {"address": zip_code},
        settings=settings,
        error_cls=UpstreamGeocodeError,
    )
    if isinstance(fetched, Failure):
        return fetched

    result = parse_geocode_response(fetched.value)
    if isinstance(result, Failure):
        logger.warning("Geocoding %r failed: %s", zip_code, result.error.details or result.error.message)
    else:
        logger.debug("Geocoded %r to %s", zip_code, result.value.as_param())
    return result
