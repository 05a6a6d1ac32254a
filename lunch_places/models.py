from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TravelMode(str, Enum):
    walking = "walking"
    driving = "driving"


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def as_param(self) -> str:
        return f"{self.latitude},{self.longitude}"


class Candidate(BaseModel):
    name: str
    location: Location
    # None means the provider gave no opening hours, which is not the same as closed.
    is_open_now: Optional[bool] = None


class TravelEstimate(BaseModel):
    candidate_index: int
    # None means no route could be computed for this destination.
    duration_seconds: Optional[float] = None


class LunchQuery(BaseModel):
    zip_code: str = Field(..., min_length=1)
    minutes: Optional[float] = Field(None, gt=0)
    travel_mode: Optional[TravelMode] = None

    @property
    def has_travel_budget(self) -> bool:
        return self.minutes is not None and self.travel_mode is not None


# Upstream response documents. Only the fields we read are declared; the rest is ignored.


class LatLng(BaseModel):
    lat: float
    lng: float


class Geometry(BaseModel):
    location: LatLng


class GeocodeResult(BaseModel):
    geometry: Geometry


class GeocodeResponse(BaseModel):
    status: str
    error_message: Optional[str] = None
    results: List[GeocodeResult] = Field(default_factory=list)


class OpeningHours(BaseModel):
    open_now: Optional[bool] = None


class NearbyPlace(BaseModel):
    name: Optional[str] = None
    geometry: Optional[Geometry] = None
    opening_hours: Optional[OpeningHours] = None


class NearbySearchResponse(BaseModel):
    status: str
    error_message: Optional[str] = None
    # Validated per entry in services.places; malformed places are skipped.
    results: List[Any] = Field(default_factory=list)


class Duration(BaseModel):
    value: float


class MatrixElement(BaseModel):
    status: str
    duration: Optional[Duration] = None


class MatrixRow(BaseModel):
    elements: List[MatrixElement] = Field(default_factory=list)


class DistanceMatrixResponse(BaseModel):
    status: str
    error_message: Optional[str] = None
    rows: List[MatrixRow] = Field(default_factory=list)
