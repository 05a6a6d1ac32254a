from __future__ import annotations

import logging
import math
from typing import Optional

import aiohttp
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lunch_places.config import Settings, get_settings
from lunch_places.errors import InputValidationError, LunchPlacesError, MethodNotAllowedError, UnexpectedError
from lunch_places.models import LunchQuery, TravelMode
from lunch_places.result import Failure
from lunch_places.services.pipeline import build_pipeline

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Finds nearby lunch spots for a zip code without exposing the Google Maps key.",
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@app.exception_handler(LunchPlacesError)
async def lunch_places_error_handler(request: Request, exc: LunchPlacesError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload(), headers=CORS_HEADERS)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Router-level errors (unknown path, methods outside the route list) share the same body shape.
    headers = {**(exc.headers or {}), **CORS_HEADERS}
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=headers)


@app.get("/", tags=["Root"])
async def root():
    return {"ok": True, "service": settings.app_name, "version": settings.version}


@app.get("/health", tags=["Healthcheck"])
async def health():
    return {"ok": True}


def parse_lunch_query(
    zip_code: Optional[str],
    minutes: Optional[str],
    travel_mode: Optional[str],
) -> LunchQuery:
    """Validate raw query-string values; every problem is a 400."""
    if not zip_code or not zip_code.strip():
        raise InputValidationError("Zip code is required.", details="Missing query parameter: zipCode")

    if (minutes is None) != (travel_mode is None):
        missing = "travelMode" if travel_mode is None else "minutes"
        raise InputValidationError(
            "Both minutes and travelMode are required together.",
            details=f"Missing query parameter: {missing}",
        )

    if minutes is None:
        return LunchQuery(zip_code=zip_code.strip())

    try:
        minutes_value = float(minutes)
    except ValueError:
        raise InputValidationError("minutes must be a number.", details=f"Got {minutes!r}")
    if not math.isfinite(minutes_value) or minutes_value <= 0:
        raise InputValidationError("minutes must be a positive number.", details=f"Got {minutes!r}")

    try:
        mode = TravelMode(travel_mode.strip().lower())
    except ValueError:
        raise InputValidationError(
            "travelMode must be 'walking' or 'driving'.", details=f"Got {travel_mode!r}"
        )

    return LunchQuery(zip_code=zip_code.strip(), minutes=minutes_value, travel_mode=mode)


@app.api_route(
    "/api/lunch-places",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    tags=["Lunch Places"],
)
async def api_lunch_places(
    request: Request,
    zip_code: Optional[str] = Query(None, alias="zipCode"),
    minutes: Optional[str] = Query(None),
    travel_mode: Optional[str] = Query(None, alias="travelMode"),
    config: Settings = Depends(get_settings),
):
    if request.method != "GET":
        raise MethodNotAllowedError()

    query = parse_lunch_query(zip_code, minutes, travel_mode)

    async with aiohttp.ClientSession() as session:
        pipeline = build_pipeline(config, session)
        try:
            result = await pipeline.run(query)
        except Exception as e:
            logger.exception("Unexpected error while finding lunch places")
            raise UnexpectedError(details=str(e))

    if isinstance(result, Failure):
        raise result.error

    return JSONResponse(content=result.value, headers=CORS_HEADERS)
