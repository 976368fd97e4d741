"""
Density Grid Schemas

Pydantic models for the density grid configuration, its cells and the
density API endpoints.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import settings
from app.schemas.geo import Bounds, Coordinates
from app.schemas.location import Location

# 9-step yellow-orange-red sequential scale
DEFAULT_COLOR_SCALE: List[str] = [
    "#ffffcc",
    "#ffeda0",
    "#fed976",
    "#feb24c",
    "#fd8d3c",
    "#fc4e2a",
    "#e31a1c",
    "#bd0026",
    "#800026",
]


class AggregationMethod(str, Enum):
    """Reduction applied to the locations inside one grid cell."""

    COUNT = "count"
    SUM = "sum"
    AVERAGE = "average"


class DensityConfig(BaseModel):
    """Grid resolution, aggregation and colors for a density view."""

    grid_size: int = Field(
        default=settings.DEFAULT_GRID_SIZE, ge=1, description="Cells per axis"
    )
    aggregation_method: AggregationMethod = AggregationMethod.COUNT
    color_scale: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COLOR_SCALE), min_length=1
    )


class GridCell(BaseModel):
    """One populated bucket of a density grid."""

    model_config = ConfigDict(frozen=True)

    center: Coordinates
    count: int = Field(..., ge=0)
    value: float
    bounds: Bounds


class ColoredGridCell(GridCell):
    """A grid cell with its color-scale token, ready for rendering."""

    color: str


class DensityGridRequest(BaseModel):
    """Request body for the density grid endpoint."""

    locations: List[Location]
    bounds: Optional[Bounds] = Field(
        None, description="Defaults to the padded extent of the locations"
    )
    config: Optional[DensityConfig] = Field(
        None, description="grid_size falls back to the optimal size for the location count"
    )


class DensityGridResponse(BaseModel):
    """Response body for the density grid endpoint."""

    cells: List[ColoredGridCell]
    max_value: float
    grid_size: int
    bounds: Bounds


class ColorRequest(BaseModel):
    """Request body for mapping a single density value to a color."""

    value: float
    max_value: float
    color_scale: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COLOR_SCALE), min_length=1
    )


class ColorResponse(BaseModel):
    color: str
