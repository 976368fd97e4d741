"""
Record Extractor

Maps one heterogeneous input record (JSON object, bare [lng, lat] pair or
a CSV row map) to a normalized Location.

Records are matched against a fixed-priority sequence of known shapes:

    1. nested ``coordinates`` field ({lat, lng}, {latitude, longitude} or [lng, lat])
    2. ``lat`` / ``lng`` keys
    3. ``latitude`` / ``longitude`` keys
    4. the record itself as a bare [lng, lat] pair

The first shape that resolves wins. A bad record never raises; it is
returned as a RecordFailure so callers can keep scanning.
"""

import math
from collections.abc import Mapping
from functools import partial
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from app.schemas.geo import Coordinates
from app.schemas.location import Location, RecordFailure, RecordFailureKind
from app.services.coordinate_validator import is_valid

# Raw (latitude, longitude) values before numeric coercion
RawPair = Tuple[Any, Any]

ExtractionResult = Union[Location, RecordFailure]

INTENSITY_FIELDS = ("intensity", "weight", "value")
NAME_FIELDS = ("name", "title")
ID_FIELDS = ("id",)
METADATA_FIELDS = ("metadata", "properties")


def _pair_from_sequence(value: Any) -> Optional[RawPair]:
    """[lng, lat] in GeoJSON axis order."""
    if isinstance(value, (list, tuple)) and len(value) >= 2:
        return value[1], value[0]
    return None


def _pair_from_mapping(value: Any, lat_key: str, lng_key: str) -> Optional[RawPair]:
    if not isinstance(value, Mapping):
        return None
    if value.get(lat_key) is None or value.get(lng_key) is None:
        return None
    return value[lat_key], value[lng_key]


def _from_nested_field(record: Any) -> Optional[RawPair]:
    if not isinstance(record, Mapping) or record.get("coordinates") is None:
        return None
    nested = record["coordinates"]
    return (
        _pair_from_mapping(nested, "lat", "lng")
        or _pair_from_mapping(nested, "latitude", "longitude")
        or _pair_from_sequence(nested)
    )


_COORDINATE_RESOLVERS: Tuple[Callable[[Any], Optional[RawPair]], ...] = (
    _from_nested_field,
    partial(_pair_from_mapping, lat_key="lat", lng_key="lng"),
    partial(_pair_from_mapping, lat_key="latitude", lng_key="longitude"),
    _pair_from_sequence,
)


def resolve_coordinates(record: Any) -> Optional[RawPair]:
    """Return the raw (lat, lng) of the first matching shape, or None."""
    for resolver in _COORDINATE_RESOLVERS:
        pair = resolver(record)
        if pair is not None:
            return pair
    return None


def to_float(value: Any) -> Optional[float]:
    """
    Coerce ints, floats and numeric strings to float.

    Returns None for anything else, including booleans and empty strings.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def first_present(record: Mapping, fields: Sequence[str]) -> Any:
    """Return the first value among *fields* that is neither None nor empty."""
    for field in fields:
        value = record.get(field)
        if value is not None and value != "":
            return value
    return None


def _normalize_id(value: Any) -> Union[int, str]:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return str(value)
    return value


def _intensity(record: Mapping) -> Optional[float]:
    intensity = to_float(first_present(record, INTENSITY_FIELDS))
    if intensity is None or not math.isfinite(intensity):
        return None
    return intensity


def _metadata(record: Mapping) -> Optional[Dict[str, Any]]:
    for field in METADATA_FIELDS:
        value = record.get(field)
        if isinstance(value, Mapping):
            return {str(key): item for key, item in value.items()}
    return None


def extract_record(
    record: Any, index: int, *, carry_metadata: bool = True
) -> ExtractionResult:
    """
    Extract a Location from a single raw record.

    Args:
        record: JSON object, [lng, lat] pair or CSV row map
        index: Position of the record, used as the fallback id
        carry_metadata: Whether ``metadata``/``properties`` are kept

    Returns:
        A Location, or a RecordFailure describing why the record was rejected
    """
    pair = resolve_coordinates(record)
    if pair is None:
        return RecordFailure(
            kind=RecordFailureKind.MISSING_COORDINATES,
            message="Missing or invalid coordinates",
        )

    raw_lat, raw_lng = pair
    latitude, longitude = to_float(raw_lat), to_float(raw_lng)
    if latitude is None or longitude is None:
        return RecordFailure(
            kind=RecordFailureKind.NON_NUMERIC_COORDINATE,
            message=f'Invalid coordinates: lat="{raw_lat}", lng="{raw_lng}"',
            latitude=raw_lat,
            longitude=raw_lng,
        )

    if not is_valid(latitude, longitude):
        return RecordFailure(
            kind=RecordFailureKind.INVALID_COORDINATE_RANGE,
            message=f"Coordinates out of range ({latitude}, {longitude})",
            latitude=latitude,
            longitude=longitude,
        )

    coordinates = Coordinates(latitude=latitude, longitude=longitude)

    if not isinstance(record, Mapping):
        return Location(id=index, coordinates=coordinates)

    record_id = first_present(record, ID_FIELDS)
    name = first_present(record, NAME_FIELDS)

    return Location(
        id=_normalize_id(record_id) if record_id is not None else index,
        name=str(name) if name is not None else None,
        coordinates=coordinates,
        intensity=_intensity(record),
        metadata=_metadata(record) if carry_metadata else None,
    )
