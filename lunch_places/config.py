from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FALLBACK_RADIUS_M = 10_000


class Settings(BaseSettings):
    """App configuration (env-friendly).

    Tip: create a .env file (keep it out of git) and put LUNCH_PLACES_API_KEY there.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Lunch Places API"
    version: str = "0.1.0"

    # Google Maps web-service key. Never sent to the browser.
    lunch_places_api_key: Optional[str] = None

    geocode_url: AnyHttpUrl = "https://maps.googleapis.com/maps/api/geocode/json"
    nearby_search_url: AnyHttpUrl = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    distance_matrix_url: AnyHttpUrl = "https://maps.googleapis.com/maps/api/distancematrix/json"

    http_timeout_s: float = 10.0

    target_count: int = Field(10, ge=1)
    fallback_radius_m: int = Field(FALLBACK_RADIUS_M, ge=1)
    # One page of Nearby Search results; Distance Matrix takes at most 25 destinations.
    max_candidates: int = Field(20, ge=1, le=25)

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
