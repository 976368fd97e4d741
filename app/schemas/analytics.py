"""
Location Analytics Schemas
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.geo import Bounds, Coordinates
from app.schemas.location import Location


class HeatmapPoint(BaseModel):
    """Flat point consumed by heatmap renderers."""

    lat: float
    lng: float
    count: float


class IntensityStats(BaseModel):
    """Descriptive statistics over positive intensities."""

    count: int = 0
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0


class LocationSummaryRequest(BaseModel):
    locations: List[Location]


class LocationSummaryResponse(BaseModel):
    """Overview of a location set used to frame a map."""

    count: int
    center: Coordinates
    bounds: Bounds
    optimal_grid_size: int
    stats: IntensityStats


class HeatmapRequest(BaseModel):
    """Request body for turning locations into heatmap points."""

    locations: List[Location]
    bounds: Optional[Bounds] = Field(None, description="Keep only locations inside")
    sample_rate: Optional[float] = Field(
        None, gt=0, le=1, description="Keep every round(1 / rate)-th location"
    )
    normalize: bool = Field(False, description="Min-max rescale intensities first")


class LocationCluster(BaseModel):
    center: Coordinates
    count: int
    locations: List[Location]


class ClusterRequest(BaseModel):
    locations: List[Location]
    cell_degrees: float = Field(0.1, gt=0, description="Cluster cell size in degrees")


class DistanceRequest(BaseModel):
    origin: Coordinates
    destination: Coordinates


class DistanceResponse(BaseModel):
    distance_km: float
