"""
Density Service

Buckets locations into an equal-angle ``grid_size x grid_size`` grid over
a bounding rectangle and aggregates each populated cell.

Cells are half-open: a location belongs to the cell whose south/west edge
is at or below it and whose north/east edge is above it. The outermost
row and column also take locations lying exactly on the rectangle's north
or east edge, so every location inside the bounds lands in exactly one
cell. Cell sizes are equal in degrees, not in area.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.schemas.density import AggregationMethod, DensityConfig, GridCell
from app.schemas.geo import Bounds, Coordinates
from app.schemas.location import Location

logger = logging.getLogger(__name__)

# (minimum location count, grid size), checked from the top
OPTIMAL_GRID_SIZES: Tuple[Tuple[int, int], ...] = (
    (500, 25),
    (200, 20),
    (50, 15),
    (10, 10),
)
MIN_GRID_SIZE = 5

DEFAULT_BOUNDS_PADDING = 0.1
WORLD_BOUNDS = Bounds(north=90.0, south=-90.0, east=180.0, west=-180.0)
# Half-width used when all locations share a latitude or longitude
DEGENERATE_HALF_EXTENT = 0.01


def _edge(origin: float, step: float, index: int) -> float:
    return origin + index * step


def _far_edge(origin: float, limit: float, step: float, index: int, grid_size: int) -> float:
    """North/east edge of cell *index*; the last cell ends exactly on *limit*."""
    if index == grid_size - 1:
        return limit
    return _edge(origin, step, index + 1)


def _bucket_index(value: float, origin: float, step: float, grid_size: int) -> int:
    """
    Index of the half-open cell containing *value*.

    The floor estimate is corrected against the exact edges computed by
    ``_edge`` so bucketing agrees with the emitted cell bounds.
    """
    index = min(max(int(math.floor((value - origin) / step)), 0), grid_size - 1)
    while index > 0 and value < _edge(origin, step, index):
        index -= 1
    while index < grid_size - 1 and value >= _edge(origin, step, index + 1):
        index += 1
    return index


def _intensity_or_default(location: Location) -> float:
    return location.intensity if location.intensity is not None else 1.0


def aggregate(locations: Sequence[Location], method: AggregationMethod) -> float:
    """Reduce the locations of one cell to a single value."""
    if not locations:
        return 0.0
    if method == AggregationMethod.COUNT:
        return float(len(locations))
    total = sum(_intensity_or_default(location) for location in locations)
    if method == AggregationMethod.SUM:
        return total
    return total / len(locations)


def calculate_grid(
    locations: Iterable[Location],
    bounds: Bounds,
    config: Optional[DensityConfig] = None,
) -> List[GridCell]:
    """
    Calculate the populated cells of a density grid.

    Args:
        locations: Locations to bucket; those outside *bounds* are ignored
        bounds: Rectangle to divide into cells
        config: Grid size and aggregation method

    Returns:
        Cells with an aggregated value above zero, ordered row by row from
        the south-west corner
    """
    config = config or DensityConfig()
    grid_size = config.grid_size
    if grid_size < 1:
        raise ValueError("grid_size must be at least 1")

    lat_step = (bounds.north - bounds.south) / grid_size
    lng_step = (bounds.east - bounds.west) / grid_size

    buckets: Dict[Tuple[int, int], List[Location]] = defaultdict(list)
    for location in locations:
        if not bounds.contains(location.coordinates):
            continue
        row = _bucket_index(location.coordinates.latitude, bounds.south, lat_step, grid_size)
        col = _bucket_index(location.coordinates.longitude, bounds.west, lng_step, grid_size)
        buckets[(row, col)].append(location)

    cells: List[GridCell] = []
    for row, col in sorted(buckets):
        members = buckets[(row, col)]
        value = aggregate(members, config.aggregation_method)
        if value <= 0:
            continue

        south = _edge(bounds.south, lat_step, row)
        west = _edge(bounds.west, lng_step, col)
        cells.append(
            GridCell(
                center=Coordinates(
                    latitude=south + lat_step / 2,
                    longitude=west + lng_step / 2,
                ),
                count=len(members),
                value=value,
                bounds=Bounds(
                    north=_far_edge(bounds.south, bounds.north, lat_step, row, grid_size),
                    south=south,
                    east=_far_edge(bounds.west, bounds.east, lng_step, col, grid_size),
                    west=west,
                ),
            )
        )

    logger.debug(
        "Density grid %dx%d (%s): %d populated cells",
        grid_size,
        grid_size,
        config.aggregation_method.value,
        len(cells),
    )
    return cells


def calculate_optimal_grid_size(location_count: int) -> int:
    """Pick a grid size for the number of locations being displayed."""
    for threshold, grid_size in OPTIMAL_GRID_SIZES:
        if location_count >= threshold:
            return grid_size
    return MIN_GRID_SIZE


def calculate_bounds(
    locations: Sequence[Location], padding: float = DEFAULT_BOUNDS_PADDING
) -> Bounds:
    """
    Extent of *locations* padded by a fraction of its size on each axis.

    No locations yields the whole world. A zero-width extent is widened and
    the result is clamped to the valid coordinate range.
    """
    if not locations:
        return WORLD_BOUNDS

    lats = [location.coordinates.latitude for location in locations]
    lngs = [location.coordinates.longitude for location in locations]
    north, south = max(lats), min(lats)
    east, west = max(lngs), min(lngs)

    lat_padding = (north - south) * padding or DEGENERATE_HALF_EXTENT
    lng_padding = (east - west) * padding or DEGENERATE_HALF_EXTENT

    return Bounds(
        north=min(north + lat_padding, WORLD_BOUNDS.north),
        south=max(south - lat_padding, WORLD_BOUNDS.south),
        east=min(east + lng_padding, WORLD_BOUNDS.east),
        west=max(west - lng_padding, WORLD_BOUNDS.west),
    )
