"""
Location Analytics

Helpers consumers apply to a loaded set of locations before display:
distances, centroids, filtering, sampling, clustering and intensity
statistics.
"""

import math
import statistics
from collections import OrderedDict
from typing import Dict, List, Sequence, Tuple

from app.schemas.analytics import HeatmapPoint, IntensityStats
from app.schemas.geo import Bounds, Coordinates
from app.schemas.location import Location

EARTH_RADIUS_KM = 6371.0


def calculate_distance(origin: Coordinates, destination: Coordinates) -> float:
    """Great-circle distance in kilometres (haversine)."""
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lng = math.radians(destination.longitude - origin.longitude)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(destination.latitude))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_center(locations: Sequence[Location]) -> Coordinates:
    """Arithmetic mean of the coordinates; (0, 0) when empty."""
    if not locations:
        return Coordinates(latitude=0.0, longitude=0.0)
    return Coordinates(
        latitude=sum(loc.coordinates.latitude for loc in locations) / len(locations),
        longitude=sum(loc.coordinates.longitude for loc in locations) / len(locations),
    )


def filter_by_bounds(locations: Sequence[Location], bounds: Bounds) -> List[Location]:
    return [loc for loc in locations if bounds.contains(loc.coordinates)]


def normalize_intensities(locations: Sequence[Location]) -> List[Location]:
    """
    Rescale intensities to 0-1 using min-max over the positive values.

    Locations without an intensity count as 1 when finding the range and
    become 0 afterwards. A zero range leaves the input unchanged.
    """
    positives = [
        loc.intensity if loc.intensity is not None else 1.0
        for loc in locations
    ]
    positives = [value for value in positives if value > 0]
    if not positives:
        return list(locations)

    low, high = min(positives), max(positives)
    spread = high - low
    if spread == 0:
        return list(locations)

    return [
        loc.model_copy(
            update={
                "intensity": (loc.intensity - low) / spread if loc.intensity else 0.0
            }
        )
        for loc in locations
    ]


def to_heatmap_points(locations: Sequence[Location]) -> List[HeatmapPoint]:
    return [
        HeatmapPoint(
            lat=loc.coordinates.latitude,
            lng=loc.coordinates.longitude,
            count=loc.intensity if loc.intensity else 1.0,
        )
        for loc in locations
    ]


def calculate_stats(locations: Sequence[Location]) -> IntensityStats:
    """Statistics over the strictly positive intensities."""
    values = sorted(
        loc.intensity for loc in locations if loc.intensity is not None and loc.intensity > 0
    )
    if not values:
        return IntensityStats()
    return IntensityStats(
        count=len(values),
        min=values[0],
        max=values[-1],
        mean=statistics.fmean(values),
        median=statistics.median(values),
        std_dev=statistics.pstdev(values),
    )


def sample_locations(locations: Sequence[Location], sample_rate: float) -> List[Location]:
    """
    Keep every n-th location, where n = round(1 / sample_rate).

    Raises:
        ValueError: If sample_rate is not in (0, 1]
    """
    if not 0 < sample_rate <= 1:
        raise ValueError("Sample rate must be between 0 and 1")
    step = max(round(1 / sample_rate), 1)
    return [loc for index, loc in enumerate(locations) if index % step == 0]


def cluster_by_proximity(
    locations: Sequence[Location], cell_degrees: float = 0.1
) -> List[List[Location]]:
    """Group locations sharing a ``cell_degrees`` square, in first-seen order."""
    if cell_degrees <= 0:
        raise ValueError("cell_degrees must be positive")
    clusters: Dict[Tuple[int, int], List[Location]] = OrderedDict()
    for loc in locations:
        key = (
            math.floor(loc.coordinates.latitude / cell_degrees),
            math.floor(loc.coordinates.longitude / cell_degrees),
        )
        clusters.setdefault(key, []).append(loc)
    return list(clusters.values())
