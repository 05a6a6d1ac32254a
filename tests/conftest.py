from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from lunch_places.config import Settings


class FakeResponse:
    def __init__(self, payload: Any = None, *, status: int = 200, text: str = "") -> None:
        self.payload = payload
        self.status = status
        self._text = text

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession; hands out queued responses in order."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: List[Tuple[str, dict]] = []

    def get(self, url: str, params: Optional[dict] = None, timeout: Any = None) -> FakeResponse:
        self.calls.append((url, dict(params or {})))
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def place(name: Optional[str], lat: float = 40.75, lng: float = -73.99, open_now: Optional[bool] = None) -> dict:
    raw: dict = {"geometry": {"location": {"lat": lat, "lng": lng}}}
    if name is not None:
        raw["name"] = name
    if open_now is not None:
        raw["opening_hours"] = {"open_now": open_now}
    return raw


def matrix(*durations: Optional[float]) -> dict:
    elements = []
    for value in durations:
        if value is None:
            elements.append({"status": "ZERO_RESULTS"})
        else:
            elements.append({"status": "OK", "duration": {"value": value, "text": "n/a"}})
    return {"status": "OK", "rows": [{"elements": elements}]}


GEOCODE_10001 = {
    "status": "OK",
    "results": [{"geometry": {"location": {"lat": 40.7506, "lng": -73.9972}}}],
}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, lunch_places_api_key="test-key", http_timeout_s=1.0)
