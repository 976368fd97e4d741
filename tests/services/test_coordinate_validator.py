"""
Unit tests for the coordinate validator.
"""

import math

import pytest

from app.schemas.geo import Coordinates
from app.services.coordinate_validator import is_valid, is_valid_coordinates


@pytest.mark.parametrize(
    "latitude, longitude",
    [(0, 0), (90, 180), (-90, -180), (40.7128, -74.006), (-33.8688, 151.2093)],
)
def test_valid_pairs(latitude, longitude):
    assert is_valid(latitude, longitude) is True


@pytest.mark.parametrize(
    "latitude, longitude",
    [
        (90.0001, 0),
        (-90.0001, 0),
        (0, 180.0001),
        (0, -180.0001),
        (95, -74.006),
        (math.nan, 0),
        (0, math.nan),
        (math.inf, 0),
        (0, -math.inf),
    ],
)
def test_invalid_pairs(latitude, longitude):
    assert is_valid(latitude, longitude) is False


def test_non_numbers_are_invalid():
    assert is_valid("40.7", "-74.0") is False
    assert is_valid(None, 0) is False
    assert is_valid(True, False) is False


def test_coordinates_instance():
    assert is_valid_coordinates(Coordinates(latitude=51.5034, longitude=-0.1276)) is True
