"""
Locations API Endpoint

Summaries and display helpers for a loaded location set.
"""

import logging
from typing import List

from fastapi import APIRouter

from app.schemas.analytics import (
    ClusterRequest,
    DistanceRequest,
    DistanceResponse,
    HeatmapPoint,
    HeatmapRequest,
    LocationCluster,
    LocationSummaryRequest,
    LocationSummaryResponse,
)
from app.services.density_service import calculate_bounds, calculate_optimal_grid_size
from app.services.location_analytics import (
    calculate_center,
    calculate_distance,
    calculate_stats,
    cluster_by_proximity,
    filter_by_bounds,
    normalize_intensities,
    sample_locations,
    to_heatmap_points,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/summary", response_model=LocationSummaryResponse)
async def location_summary(request: LocationSummaryRequest) -> LocationSummaryResponse:
    """Center, padded bounds, suggested grid size and intensity statistics."""
    logger.info("Location summary request: locations=%d", len(request.locations))
    return LocationSummaryResponse(
        count=len(request.locations),
        center=calculate_center(request.locations),
        bounds=calculate_bounds(request.locations),
        optimal_grid_size=calculate_optimal_grid_size(len(request.locations)),
        stats=calculate_stats(request.locations),
    )


@router.post("/heatmap", response_model=List[HeatmapPoint])
async def heatmap_points(request: HeatmapRequest) -> List[HeatmapPoint]:
    """
    Flatten locations into heatmap points.

    Filtering by bounds runs first, then sampling, then normalization.
    """
    locations = list(request.locations)
    if request.bounds is not None:
        locations = filter_by_bounds(locations, request.bounds)
    if request.sample_rate is not None:
        locations = sample_locations(locations, request.sample_rate)
    if request.normalize:
        locations = normalize_intensities(locations)

    logger.info(
        "Heatmap request: locations=%d, kept=%d", len(request.locations), len(locations)
    )
    return to_heatmap_points(locations)


@router.post("/clusters", response_model=List[LocationCluster])
async def location_clusters(request: ClusterRequest) -> List[LocationCluster]:
    """Group nearby locations, in first-seen order."""
    clusters = cluster_by_proximity(request.locations, request.cell_degrees)
    return [
        LocationCluster(
            center=calculate_center(members), count=len(members), locations=members
        )
        for members in clusters
    ]


@router.post("/distance", response_model=DistanceResponse)
async def location_distance(request: DistanceRequest) -> DistanceResponse:
    """Great-circle distance between two coordinates in kilometres."""
    return DistanceResponse(
        distance_km=calculate_distance(request.origin, request.destination)
    )
