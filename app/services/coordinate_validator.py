"""
Coordinate Validator

Pure predicates over latitude/longitude pairs. Every parser runs these
before a Location is accepted.
"""

import math
from numbers import Real
from typing import Any

from app.schemas.geo import Coordinates

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def is_valid(latitude: Any, longitude: Any) -> bool:
    """Return True if both values are finite numbers within WGS84 range."""
    if not (_is_finite_number(latitude) and _is_finite_number(longitude)):
        return False
    return (
        MIN_LATITUDE <= latitude <= MAX_LATITUDE
        and MIN_LONGITUDE <= longitude <= MAX_LONGITUDE
    )


def is_valid_coordinates(coordinates: Coordinates) -> bool:
    """Return True if a Coordinates instance satisfies the range invariant."""
    return is_valid(coordinates.latitude, coordinates.longitude)
