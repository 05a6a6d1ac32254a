from __future__ import annotations

import logging
from typing import List

import aiohttp

from lunch_places.config import Settings
from lunch_places.errors import ConfigurationError
from lunch_places.models import LunchQuery
from lunch_places.result import Failure, Ok, Result
from lunch_places.services.geocoder import geocode_zip
from lunch_places.services.places import find_candidates, search_radius_m
from lunch_places.services.selector import select_open_now, select_within_budget
from lunch_places.services.travel_time import estimate_travel_times, minutes_to_seconds

logger = logging.getLogger(__name__)


class LunchPlacesPipeline:
    """Geocode -> nearby search -> travel times -> selection, for one request."""

    def __init__(self, settings: Settings, session: aiohttp.ClientSession) -> None:
        self.settings = settings
        self.session = session

    async def run(self, query: LunchQuery) -> Result[List[str]]:
        settings = self.settings

        origin = await geocode_zip(self.session, query.zip_code, settings=settings)
        if isinstance(origin, Failure):
            return origin

        radius_m = search_radius_m(query.travel_mode, query.minutes, fallback_m=settings.fallback_radius_m)
        found = await find_candidates(self.session, origin.value, radius_m, settings=settings)
        if isinstance(found, Failure):
            return found
        candidates = found.value

        if not query.has_travel_budget:
            names = select_open_now(candidates, settings.target_count)
            logger.info("zip=%s mode=open-now candidates=%d returned=%d", query.zip_code, len(candidates), len(names))
            return Ok(names)

        estimated = await estimate_travel_times(
            self.session,
            origin.value,
            [c.location for c in candidates],
            query.travel_mode,
            settings=settings,
        )
        if isinstance(estimated, Failure):
            return estimated

        budget_s = minutes_to_seconds(query.minutes)
        names = select_within_budget(candidates, estimated.value, budget_s, settings.target_count)
        logger.info(
            "zip=%s mode=%s budget_s=%.0f radius_m=%d candidates=%d returned=%d",
            query.zip_code,
            query.travel_mode.value,
            budget_s,
            radius_m,
            len(candidates),
            len(names),
        )
        return Ok(names)


def build_pipeline(settings: Settings, session: aiohttp.ClientSession) -> LunchPlacesPipeline:
    if not settings.lunch_places_api_key:
        logger.error("LUNCH_PLACES_API_KEY environment variable is not set.")
        raise ConfigurationError()
    return LunchPlacesPipeline(settings, session)
