import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture(scope="function")
def client():
    """Provides a FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_json_text():
    """JSON array with three cities."""
    return (
        '[{"id": 1, "name": "New York", "lat": 40.7128, "lng": -74.006, "intensity": 0.9},'
        ' {"id": 2, "name": "Los Angeles", "lat": 34.0522, "lng": -118.2437, "intensity": 0.7},'
        ' {"id": 3, "name": "Chicago", "lat": 41.8781, "lng": -87.6298, "intensity": 0.6}]'
    )


@pytest.fixture
def sample_csv_text():
    """CSV with a header and three cities."""
    return "\n".join(
        [
            "name,lat,lng,intensity",
            "New York,40.7128,-74.0060,0.9",
            "Los Angeles,34.0522,-118.2437,0.7",
            "Chicago,41.8781,-87.6298,0.6",
        ]
    )


@pytest.fixture
def sample_geojson_text():
    """FeatureCollection with two Point features."""
    return (
        '{"type": "FeatureCollection", "features": ['
        '{"type": "Feature", "geometry": {"type": "Point", "coordinates": [-74.006, 40.7128]},'
        ' "properties": {"name": "New York", "intensity": 0.9, "alert_type": "fire"}},'
        '{"type": "Feature", "geometry": {"type": "Point", "coordinates": [-118.2437, 34.0522]},'
        ' "properties": {"name": "Los Angeles", "intensity": 0.7}}]}'
    )
