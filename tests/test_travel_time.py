from __future__ import annotations

import asyncio

from conftest import FakeResponse, FakeSession, matrix
from lunch_places.errors import UpstreamEstimationError
from lunch_places.models import Location, TravelMode
from lunch_places.result import Failure, Ok
from lunch_places.services.travel_time import (
    estimate_travel_times,
    minutes_to_seconds,
    parse_distance_matrix,
)

ORIGIN = Location(latitude=40.7506, longitude=-73.9972)
DESTINATIONS = [
    Location(latitude=40.7527, longitude=-73.9772),
    Location(latitude=40.7411, longitude=-73.9897),
]


def test_minutes_to_seconds():
    assert minutes_to_seconds(10) == 600
    assert minutes_to_seconds(2.5) == 150


def test_parse_matrix_aligns_by_index():
    result = parse_distance_matrix(matrix(420, 75), destination_count=2)

    assert isinstance(result, Ok)
    assert [(e.candidate_index, e.duration_seconds) for e in result.value] == [(0, 420), (1, 75)]


def test_parse_matrix_unroutable_elements_are_absent():
    payload = matrix(300, None)
    payload["rows"][0]["elements"].append({"status": "OK"})

    result = parse_distance_matrix(payload, destination_count=3)

    assert [e.duration_seconds for e in result.value] == [300, None, None]


def test_parse_matrix_provider_failure():
    result = parse_distance_matrix({"status": "OVER_QUERY_LIMIT", "rows": []}, destination_count=2)

    assert isinstance(result, Failure)
    assert isinstance(result.error, UpstreamEstimationError)
    assert result.error.status_code == 502
    assert result.error.details == "OVER_QUERY_LIMIT"


def test_parse_matrix_missing_rows():
    result = parse_distance_matrix({"status": "OK", "rows": []}, destination_count=1)

    assert isinstance(result, Failure)


def test_parse_matrix_element_count_mismatch():
    result = parse_distance_matrix(matrix(10), destination_count=2)

    assert isinstance(result, Failure)
    assert "Expected 2 elements, got 1." == result.error.details


def test_parse_matrix_malformed():
    result = parse_distance_matrix({"status": "OK", "rows": [{"elements": [{"duration": 5}]}]}, 1)

    assert isinstance(result, Failure)
    assert isinstance(result.error, UpstreamEstimationError)


def test_estimate_builds_single_request(settings):
    session = FakeSession(FakeResponse(matrix(420, 75)))

    result = asyncio.run(
        estimate_travel_times(session, ORIGIN, DESTINATIONS, TravelMode.walking, settings=settings)
    )

    assert isinstance(result, Ok)
    assert len(session.calls) == 1
    url, params = session.calls[0]
    assert url == str(settings.distance_matrix_url)
    assert params == {
        "origins": "40.7506,-73.9972",
        "destinations": "40.7527,-73.9772|40.7411,-73.9897",
        "mode": "walking",
        "key": "test-key",
    }


def test_estimate_without_destinations_skips_provider(settings):
    session = FakeSession()

    result = asyncio.run(estimate_travel_times(session, ORIGIN, [], TravelMode.driving, settings=settings))

    assert isinstance(result, Ok)
    assert result.value == []
    assert session.calls == []


def test_estimate_http_error(settings):
    session = FakeSession(FakeResponse(status=500, text="backend error"))

    result = asyncio.run(
        estimate_travel_times(session, ORIGIN, DESTINATIONS, TravelMode.driving, settings=settings)
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, UpstreamEstimationError)
    assert result.error.status_code == 500
