from __future__ import annotations

import pytest
from pydantic import ValidationError

from lunch_places.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.target_count == 10
    assert settings.fallback_radius_m == 10000
    assert settings.max_candidates == 20


@pytest.mark.parametrize("target_count", [0, -1])
def test_target_count_must_be_positive(target_count):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, target_count=target_count)


def test_max_candidates_fits_one_distance_matrix_request():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_candidates=26)


def test_target_count_from_environment(monkeypatch):
    monkeypatch.setenv("TARGET_COUNT", "5")

    assert Settings(_env_file=None).target_count == 5
