"""
Unit tests for the JSON, CSV/TSV and GeoJSON parsers.
"""

import json

from app.schemas.load_result import ColumnMapping, LoadOptions
from app.services.format_parsers import (
    parse_csv,
    parse_geojson,
    parse_json,
    split_delimited_line,
)


def test_json_single_record():
    result = parse_json('[{"lat": 40.7128, "lng": -74.006, "intensity": 0.9}]')

    assert len(result.locations) == 1
    assert result.errors == []
    location = result.locations[0]
    assert location.coordinates.latitude == 40.7128
    assert location.coordinates.longitude == -74.006
    assert location.intensity == 0.9
    assert location.id == 0


def test_json_three_cities(sample_json_text):
    result = parse_json(sample_json_text)

    assert [loc.name for loc in result.locations] == ["New York", "Los Angeles", "Chicago"]
    assert result.summary.total_rows == 3
    assert result.summary.valid_locations == 3
    assert result.summary.invalid_rows == 0


def test_json_locations_wrapper():
    result = parse_json('{"locations": [{"lat": 1, "lng": 2}]}')

    assert len(result.locations) == 1


def test_json_data_wrapper():
    result = parse_json('{"data": [{"latitude": 1, "longitude": 2}]}')

    assert len(result.locations) == 1


def test_json_invalid_syntax():
    result = parse_json("{not json")

    assert result.locations == []
    assert result.errors == ["Invalid JSON format"]
    assert result.summary.total_rows == 0
    assert result.summary.valid_locations == 0


def test_json_wrong_shape():
    result = parse_json('{"points": []}')

    assert len(result.errors) == 1
    assert "array of locations" in result.errors[0]
    assert result.summary.total_rows == 0


def test_json_scalar_document():
    result = parse_json("42")

    assert len(result.errors) == 1
    assert result.locations == []


def test_json_bad_records_do_not_abort():
    text = json.dumps(
        [
            {"lat": 1, "lng": 2},
            {"name": "no coords"},
            {"lat": 95, "lng": 0},
            {"lat": "x", "lng": 0},
            {"lat": 3, "lng": 4},
        ]
    )

    result = parse_json(text)

    assert len(result.locations) == 2
    assert len(result.errors) == 3
    assert result.errors[0].startswith("Row 2:")
    assert result.errors[1].startswith("Row 3:")
    assert result.errors[2].startswith("Row 4:")
    assert result.summary.total_rows == 5
    assert result.summary.invalid_rows == 3


def test_json_empty_array():
    result = parse_json("[]")

    assert result.locations == []
    assert result.errors == []
    assert result.summary.total_rows == 0


def test_json_metadata_carried():
    result = parse_json('[{"lat": 1, "lng": 2, "metadata": {"source": "feed"}}]')

    assert result.locations[0].metadata == {"source": "feed"}


def test_split_plain():
    assert split_delimited_line("a, b ,c", ",") == ["a", "b", "c"]


def test_split_quoted_delimiter():
    assert split_delimited_line('"New York, NY",40.7,-74.0', ",") == [
        "New York, NY",
        "40.7",
        "-74.0",
    ]


def test_split_single_quotes():
    assert split_delimited_line("'a,b',c", ",") == ["a,b", "c"]


def test_split_inner_apostrophe_kept():
    assert split_delimited_line("O'Brien's,1", ",") == ["O'Brien's", "1"]


def test_split_trailing_empty_token():
    assert split_delimited_line("a,b,", ",") == ["a", "b", ""]


def test_split_tab_delimiter():
    assert split_delimited_line("a\tb, c", "\t") == ["a", "b, c"]


def test_csv_single_row():
    result = parse_csv("name,lat,lng\nNew York,40.7128,-74.0060")

    assert len(result.locations) == 1
    location = result.locations[0]
    assert location.name == "New York"
    assert location.coordinates.latitude == 40.7128
    assert location.coordinates.longitude == -74.006
    assert result.summary.total_rows == 1
    assert result.summary.valid_locations == 1
    assert result.summary.invalid_rows == 0


def test_csv_three_cities(sample_csv_text):
    result = parse_csv(sample_csv_text)

    assert len(result.locations) == 3
    assert result.locations[1].intensity == 0.7
    assert all(loc.metadata is None for loc in result.locations)


def test_csv_out_of_range_row():
    result = parse_csv("name,lat,lng\nNY,95,-74")

    assert result.locations == []
    assert len(result.errors) == 1
    assert "Row 2" in result.errors[0]
    assert "95" in result.errors[0]


def test_csv_non_numeric_row():
    result = parse_csv("lat,lng\nabc,-74")

    assert len(result.errors) == 1
    assert result.errors[0].startswith("Row 2:")
    assert "abc" in result.errors[0]


def test_csv_row_number_is_fallback_id():
    result = parse_csv("lat,lng\n1,2\n3,4")

    assert [loc.id for loc in result.locations] == [2, 3]


def test_csv_id_column():
    result = parse_csv("id,lat,lng\nA-1,1,2")

    assert result.locations[0].id == "A-1"


def test_csv_empty_text():
    result = parse_csv("")

    assert result.errors == ["File is empty"]
    assert result.summary.total_rows == 0


def test_csv_whitespace_text():
    result = parse_csv("   \n  \n")

    assert result.errors == ["File is empty"]


def test_csv_blank_lines_skipped():
    result = parse_csv("lat,lng\n1,2\n\n   \n3,4\n")

    assert len(result.locations) == 2
    assert result.summary.total_rows == 2
    assert result.errors == []


def test_csv_missing_lat_column():
    result = parse_csv("name,lng\nNY,-74")

    assert result.locations == []
    assert len(result.errors) == 1
    assert result.summary.invalid_rows == 1


def test_csv_custom_mapping():
    options = LoadOptions(
        column_mapping=ColumnMapping(lat="y", lng="x", intensity="w", name="label")
    )

    result = parse_csv("label,y,x,w\nSpot,10,20,3", options)

    location = result.locations[0]
    assert location.name == "Spot"
    assert location.coordinates.latitude == 10.0
    assert location.coordinates.longitude == 20.0
    assert location.intensity == 3.0


def test_csv_unmapped_intensity_column_ignored():
    options = LoadOptions(column_mapping=ColumnMapping(intensity=None))

    result = parse_csv("lat,lng,intensity\n1,2,5", options)

    assert result.locations[0].intensity is None


def test_csv_without_header():
    options = LoadOptions(
        has_header=False,
        column_mapping=ColumnMapping(lat="column_0", lng="column_1", name="column_2"),
    )

    result = parse_csv("40.7128,-74.006,NY\n34.05,-118.24,LA", options)

    assert [loc.name for loc in result.locations] == ["NY", "LA"]
    assert [loc.id for loc in result.locations] == [1, 2]
    assert result.summary.total_rows == 2


def test_csv_quoted_field_with_delimiter():
    result = parse_csv('name,lat,lng\n"New York, NY",40.7128,-74.006')

    assert result.locations[0].name == "New York, NY"


def test_csv_semicolon_delimiter():
    result = parse_csv("lat;lng\n1,5;2,5", LoadOptions(delimiter=";"))

    # a comma is not a decimal separator
    assert result.locations == []
    assert len(result.errors) == 1


def test_csv_crlf_line_endings():
    result = parse_csv("lat,lng\r\n1,2\r\n3,4\r\n")

    assert len(result.locations) == 2


def test_csv_tsv_leading_empty_header_cell():
    """An unnamed first column, as pandas writes its index, keeps its place."""
    options = LoadOptions(delimiter="\t")

    result = parse_csv("\tlat\tlng\n0\t40.7\t-74.0\n1\t34.0\t-118.2\n", options)

    assert result.errors == []
    assert [
        (loc.coordinates.latitude, loc.coordinates.longitude) for loc in result.locations
    ] == [(40.7, -74.0), (34.0, -118.2)]


def test_csv_tsv_leading_empty_cell_without_header():
    options = LoadOptions(
        delimiter="\t",
        has_header=False,
        column_mapping=ColumnMapping(lat="column_1", lng="column_2"),
    )

    result = parse_csv("\t40.7\t-74.0\n\t34.0\t-118.2", options)

    assert result.errors == []
    assert [loc.coordinates.latitude for loc in result.locations] == [40.7, 34.0]


def test_csv_surrounding_blank_lines_ignored():
    result = parse_csv("\n\n  \nlat,lng\n1,2\n\n")

    assert result.errors == []
    assert result.summary.total_rows == 1
    assert result.locations[0].id == 2


def test_geojson_axis_order():
    text = json.dumps(
        {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [-74.006, 40.7128]},
                    "properties": {},
                }
            ],
        }
    )

    result = parse_geojson(text)

    location = result.locations[0]
    assert location.coordinates.latitude == 40.7128
    assert location.coordinates.longitude == -74.006


def test_geojson_defaults():
    text = json.dumps(
        {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}}
            ],
        }
    )

    location = parse_geojson(text).locations[0]

    assert location.id == "geojson-0"
    assert location.name == "Point 1"
    assert location.intensity == 0.5
    assert location.metadata == {}


def test_geojson_properties_and_alert_type(sample_geojson_text):
    result = parse_geojson(sample_geojson_text)

    new_york, los_angeles = result.locations
    assert new_york.name == "New York"
    assert new_york.intensity == 0.9
    assert new_york.metadata["alert_type"] == "fire"
    assert new_york.metadata["processedAlertType"] == "fire"
    assert "processedAlertType" not in los_angeles.metadata
    assert result.summary.total_rows == 2


def test_geojson_feature_id_used():
    text = json.dumps(
        {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "id": "f-7",
                    "geometry": {"type": "Point", "coordinates": [1, 2]},
                    "properties": {"title": "Titled"},
                }
            ],
        }
    )

    location = parse_geojson(text).locations[0]

    assert location.id == "f-7"
    assert location.name == "Titled"


def test_geojson_non_point_feature():
    text = json.dumps(
        {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
                },
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}},
            ],
        }
    )

    result = parse_geojson(text)

    assert len(result.locations) == 1
    assert result.errors == ["Feature 1: Only Point geometries are supported"]
    assert result.summary.total_rows == 2
    assert result.summary.invalid_rows == 1


def test_geojson_out_of_range_feature():
    text = json.dumps(
        {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0, 95]}}
            ],
        }
    )

    result = parse_geojson(text)

    assert result.locations == []
    assert result.errors[0].startswith("Feature 1:")


def test_geojson_invalid_syntax():
    result = parse_geojson("{oops")

    assert result.errors == ["Invalid GeoJSON format"]
    assert result.summary.total_rows == 0


def test_geojson_not_a_feature_collection():
    result = parse_geojson('{"type": "Feature"}')

    assert result.errors == ["GeoJSON must be a FeatureCollection with features array"]
