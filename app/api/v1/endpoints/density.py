"""
Density API Endpoint

Computes render-ready density grids for a set of locations.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from app.schemas.density import (
    ColorRequest,
    ColorResponse,
    DensityConfig,
    DensityGridRequest,
    DensityGridResponse,
)
from app.services.color_scale import MIN_SCALE_MAX, colorize_grid, get_color_for_density
from app.services.density_service import (
    calculate_bounds,
    calculate_grid,
    calculate_optimal_grid_size,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/grid", response_model=DensityGridResponse)
async def density_grid(request: DensityGridRequest) -> DensityGridResponse:
    """
    Bucket locations into a colored density grid.

    Bounds default to the padded extent of the locations. When the request
    does not set ``grid_size`` it is chosen from the number of locations.
    """
    bounds = request.bounds or calculate_bounds(request.locations)

    config = request.config or DensityConfig()
    if "grid_size" not in config.model_fields_set:
        config = config.model_copy(
            update={"grid_size": calculate_optimal_grid_size(len(request.locations))}
        )

    logger.info(
        "Density grid request: locations=%d, grid_size=%d, method=%s",
        len(request.locations),
        config.grid_size,
        config.aggregation_method.value,
    )

    try:
        cells = calculate_grid(request.locations, bounds, config)
        colored = colorize_grid(cells, config.color_scale)
    except ValueError as e:
        logger.error("Invalid density request: %s", str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return DensityGridResponse(
        cells=colored,
        max_value=max([cell.value for cell in cells] + [MIN_SCALE_MAX]),
        grid_size=config.grid_size,
        bounds=bounds,
    )


@router.post("/color", response_model=ColorResponse)
async def density_color(request: ColorRequest) -> ColorResponse:
    """Map a single density value onto a color scale."""
    try:
        color = get_color_for_density(request.value, request.max_value, request.color_scale)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return ColorResponse(color=color)
