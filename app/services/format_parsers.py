"""
Format Parsers

Turn raw JSON, CSV/TSV and GeoJSON text into a LoadResult.

A bad record never aborts a parse: it becomes one entry in
``LoadResult.errors`` ("Row N: ..." / "Feature N: ...", 1-based) and the
parser moves on. Only input that is not structurally usable at all
(invalid JSON syntax, an empty file, the wrong top-level shape) short-circuits
into a single-error result.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from app.schemas.load_result import ColumnMapping, LoadOptions, LoadResult, LoadSummary
from app.schemas.location import Location, RecordFailure
from app.services.record_extractor import extract_record, first_present

logger = logging.getLogger(__name__)

QUOTE_CHARS = ('"', "'")
_EDGE_QUOTES_RE = re.compile(r"^[\"']|[\"']$")

GEOJSON_NAME_FIELDS = ("name", "title", "address", "description")
GEOJSON_INTENSITY_FIELDS = ("intensity", "weight", "value")
ALERT_TYPE_FIELDS = ("alert_type", "alertType", "type", "category")
DEFAULT_GEOJSON_INTENSITY = 0.5


def _build_result(
    source: str, locations: List[Location], errors: List[str], total_rows: int
) -> LoadResult:
    logger.info(
        "Parsed %s input: %d of %d records valid", source, len(locations), total_rows
    )
    return LoadResult(
        locations=locations,
        errors=errors,
        summary=LoadSummary(
            total_rows=total_rows,
            valid_locations=len(locations),
            invalid_rows=total_rows - len(locations),
        ),
    )


def _structural_failure(source: str, message: str) -> LoadResult:
    logger.warning("Rejected %s input: %s", source, message)
    return LoadResult.failure(message)


# ── JSON ──────────────────────────────────────────────────────────


def _json_records(data: Any) -> Optional[List[Any]]:
    """Accept a bare list, {"locations": [...]} or {"data": [...]}."""
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        for key in ("locations", "data"):
            if isinstance(data.get(key), list):
                return data[key]
    return None


def parse_json(text: str) -> LoadResult:
    """
    Parse a JSON document of location records.

    Each element goes through the record extractor; its id defaults to the
    element's zero-based position.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return _structural_failure("JSON", "Invalid JSON format")

    records = _json_records(data)
    if records is None:
        return _structural_failure(
            "JSON",
            'JSON must contain an array of locations or have a "locations"/"data" '
            "property with an array",
        )

    locations: List[Location] = []
    errors: List[str] = []
    for index, record in enumerate(records):
        result = extract_record(record, index)
        if isinstance(result, RecordFailure):
            logger.debug("JSON row %d rejected: %s", index + 1, result.message)
            errors.append(f"Row {index + 1}: {result.message}")
        else:
            locations.append(result)

    return _build_result("JSON", locations, errors, len(records))


# ── CSV / TSV ─────────────────────────────────────────────────────


def _strip_edge_quotes(value: str) -> str:
    return _EDGE_QUOTES_RE.sub("", value)


def split_delimited_line(line: str, delimiter: str) -> List[str]:
    """
    Split one delimited line into trimmed tokens.

    A token may be wrapped in matching single or double quotes; the
    delimiter is literal inside them and the quotes are dropped. A quote
    character in the middle of a token (``O'Brien``) is kept as text.
    """
    values: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    at_token_start = True

    for char in line:
        if quote is not None:
            if char == quote:
                quote = None
            else:
                current.append(char)
        elif char == delimiter:
            values.append("".join(current).strip())
            current = []
            at_token_start = True
        elif at_token_start and char in QUOTE_CHARS:
            quote = char
            at_token_start = False
        else:
            current.append(char)
            if not char.isspace():
                at_token_start = False

    values.append("".join(current).strip())
    return [_strip_edge_quotes(value) for value in values]


def _mapped_row(row: Dict[str, str], mapping: ColumnMapping) -> Dict[str, str]:
    """
    Project a row onto the canonical record keys.

    Missing lat/lng cells become empty strings so they are reported as
    non-numeric rather than missing.
    """
    record = {"lat": row.get(mapping.lat, ""), "lng": row.get(mapping.lng, "")}
    for field in ("intensity", "name", "id"):
        column = getattr(mapping, field)
        if column is not None and column in row:
            record[field] = row[column]
    return record


def _trim_blank_lines(lines: List[str]) -> List[str]:
    """Drop blank lines at both ends, keeping edge whitespace of the others."""
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def parse_csv(text: str, options: Optional[LoadOptions] = None) -> LoadResult:
    """
    Parse delimited text into locations.

    Row numbers in errors are 1-based and count the header line. Blank
    lines are skipped and do not count towards ``total_rows``. Only mapped
    columns survive; CSV locations never carry metadata.
    """
    options = options or LoadOptions()
    delimiter = options.delimiter
    mapping = options.column_mapping

    if not text or not text.strip():
        return _structural_failure("CSV", "File is empty")

    lines = _trim_blank_lines(text.splitlines())

    if options.has_header:
        headers = split_delimited_line(lines[0], delimiter)
        data_start = 1
    else:
        column_count = len(split_delimited_line(lines[0], delimiter))
        headers = [f"column_{i}" for i in range(column_count)]
        data_start = 0

    locations: List[Location] = []
    errors: List[str] = []
    total_rows = 0

    for line_index in range(data_start, len(lines)):
        line = lines[line_index]
        if not line.strip():
            continue
        total_rows += 1
        row_number = line_index + 1

        row = dict(zip(headers, split_delimited_line(line, delimiter)))
        result = extract_record(
            _mapped_row(row, mapping), row_number, carry_metadata=False
        )
        if isinstance(result, RecordFailure):
            logger.debug("CSV row %d rejected: %s", row_number, result.message)
            errors.append(f"Row {row_number}: {result.message}")
        else:
            locations.append(result)

    return _build_result("CSV", locations, errors, total_rows)


# ── GeoJSON ───────────────────────────────────────────────────────


def _feature_record(feature: Mapping, index: int) -> Dict[str, Any]:
    """Flatten a Point feature into a record the extractor understands."""
    properties = feature.get("properties")
    if not isinstance(properties, Mapping):
        properties = {}

    metadata = dict(properties)
    alert_type = first_present(properties, ALERT_TYPE_FIELDS)
    if alert_type is not None:
        metadata["processedAlertType"] = alert_type

    record_id = first_present(properties, ("id",))
    if record_id is None:
        record_id = feature.get("id")
    intensity = first_present(properties, GEOJSON_INTENSITY_FIELDS)

    return {
        "coordinates": feature["geometry"]["coordinates"],
        "id": record_id if record_id is not None else f"geojson-{index}",
        "name": first_present(properties, GEOJSON_NAME_FIELDS) or f"Point {index + 1}",
        "intensity": intensity if intensity is not None else DEFAULT_GEOJSON_INTENSITY,
        "metadata": metadata,
    }


def _is_point(feature: Mapping) -> bool:
    geometry = feature.get("geometry")
    return (
        isinstance(geometry, Mapping)
        and geometry.get("type") == "Point"
        and geometry.get("coordinates") is not None
    )


def parse_geojson(text: str) -> LoadResult:
    """
    Parse a GeoJSON FeatureCollection of Point features.

    Coordinates are read in GeoJSON axis order [lng, lat]. Feature
    properties are carried through as metadata, with the alert type
    mirrored into ``processedAlertType``.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return _structural_failure("GeoJSON", "Invalid GeoJSON format")

    if (
        not isinstance(data, Mapping)
        or data.get("type") != "FeatureCollection"
        or not isinstance(data.get("features"), list)
    ):
        return _structural_failure(
            "GeoJSON", "GeoJSON must be a FeatureCollection with features array"
        )

    features = data["features"]
    locations: List[Location] = []
    errors: List[str] = []

    for index, feature in enumerate(features):
        number = index + 1
        if not isinstance(feature, Mapping):
            errors.append(f"Feature {number}: Invalid feature")
            continue
        if not _is_point(feature):
            errors.append(f"Feature {number}: Only Point geometries are supported")
            continue

        result = extract_record(_feature_record(feature, index), index)
        if isinstance(result, RecordFailure):
            logger.debug("GeoJSON feature %d rejected: %s", number, result.message)
            errors.append(f"Feature {number}: {result.message}")
        else:
            locations.append(result)

    return _build_result("GeoJSON", locations, errors, len(features))
