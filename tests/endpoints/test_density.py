"""
Unit tests for density endpoints.
"""

from fastapi.testclient import TestClient

from app.schemas.density import DEFAULT_COLOR_SCALE


def _location(lat, lng, intensity=None):
    return {"coordinates": {"latitude": lat, "longitude": lng}, "intensity": intensity}


def test_density_grid_with_bounds(client: TestClient):
    response = client.post(
        "/api/v1/density/grid",
        json={
            "locations": [_location(1, 1), _location(1.5, 1.5), _location(9, 9)],
            "bounds": {"north": 10, "south": 0, "east": 10, "west": 0},
            "config": {"grid_size": 2},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["grid_size"] == 2
    assert data["max_value"] == 2.0
    assert [cell["count"] for cell in data["cells"]] == [2, 1]
    assert data["cells"][0]["color"] == DEFAULT_COLOR_SCALE[-1]
    assert data["cells"][1]["color"] == DEFAULT_COLOR_SCALE[4]


def test_density_grid_defaults(client: TestClient):
    """Test that bounds and grid size are derived from the locations."""
    response = client.post(
        "/api/v1/density/grid",
        json={"locations": [_location(40.7128, -74.006), _location(34.0522, -118.2437)]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["grid_size"] == 5
    assert data["bounds"]["north"] > 40.7128
    assert data["bounds"]["west"] < -118.2437
    assert sum(cell["count"] for cell in data["cells"]) == 2


def test_density_grid_average(client: TestClient):
    response = client.post(
        "/api/v1/density/grid",
        json={
            "locations": [_location(1, 1, 0.2), _location(1, 1, 0.8)],
            "bounds": {"north": 10, "south": 0, "east": 10, "west": 0},
            "config": {"grid_size": 1, "aggregation_method": "average"},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["cells"][0]["value"] == 0.5
    assert data["max_value"] == 1.0


def test_density_grid_empty(client: TestClient):
    response = client.post("/api/v1/density/grid", json={"locations": []})

    assert response.status_code == 200
    data = response.json()
    assert data["cells"] == []
    assert data["bounds"] == {"north": 90.0, "south": -90.0, "east": 180.0, "west": -180.0}


def test_density_grid_invalid_grid_size(client: TestClient):
    response = client.post(
        "/api/v1/density/grid",
        json={"locations": [], "config": {"grid_size": 0}},
    )

    assert response.status_code == 422


def test_density_grid_invalid_bounds(client: TestClient):
    response = client.post(
        "/api/v1/density/grid",
        json={"locations": [], "bounds": {"north": 0, "south": 10, "east": 10, "west": 0}},
    )

    assert response.status_code == 422


def test_density_color(client: TestClient):
    response = client.post(
        "/api/v1/density/color",
        json={"value": 10, "max_value": 10, "color_scale": ["a", "b", "c"]},
    )

    assert response.status_code == 200
    assert response.json() == {"color": "c"}


def test_density_color_zero_max(client: TestClient):
    response = client.post("/api/v1/density/color", json={"value": 0, "max_value": 0})

    assert response.status_code == 200
    assert response.json()["color"] == DEFAULT_COLOR_SCALE[0]


def test_density_color_empty_scale(client: TestClient):
    response = client.post(
        "/api/v1/density/color", json={"value": 1, "max_value": 1, "color_scale": []}
    )

    assert response.status_code == 422
