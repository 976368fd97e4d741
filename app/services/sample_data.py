"""
Sample data files demonstrating every supported input format.
"""

import json
from typing import Dict

_CITIES = [
    {"id": 1, "name": "New York", "lat": 40.7128, "lng": -74.0060, "intensity": 0.9},
    {"id": 2, "name": "Los Angeles", "lat": 34.0522, "lng": -118.2437, "intensity": 0.7},
    {"id": 3, "name": "Chicago", "lat": 41.8781, "lng": -87.6298, "intensity": 0.6},
]


def generate_sample_files() -> Dict[str, str]:
    """Return file name -> contents for sample JSON, CSV and GeoJSON files."""
    csv_lines = ["name,lat,lng,intensity"] + [
        f"{city['name']},{city['lat']},{city['lng']:.4f},{city['intensity']}"
        for city in _CITIES
    ]
    features = [
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [city["lng"], city["lat"]]},
            "properties": {"name": city["name"], "intensity": city["intensity"]},
        }
        for city in _CITIES[:2]
    ]
    return {
        "sample.json": json.dumps(_CITIES, indent=2),
        "sample.csv": "\n".join(csv_lines),
        "sample.geojson": json.dumps(
            {"type": "FeatureCollection", "features": features}, indent=2
        ),
    }
