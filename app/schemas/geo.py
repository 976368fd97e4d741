"""
Coordinate and Bounds Type Definitions

Pydantic models for representing geographic coordinates and the
rectangular bounds used by the density grid.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinates(BaseModel):
    """
    Geographic coordinates (latitude and longitude).

    Immutable once constructed. NaN and infinities are rejected.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ..., ge=-90.0, le=90.0, allow_inf_nan=False, description="Latitude in decimal degrees"
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        allow_inf_nan=False,
        description="Longitude in decimal degrees",
    )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


class Bounds(BaseModel):
    """
    Rectangular geographic bounds in decimal degrees.

    Rectangles crossing the antimeridian are not supported; callers clamp
    viewport bounds to the valid range first.
    """

    model_config = ConfigDict(frozen=True)

    north: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    south: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    east: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    west: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_edges(self) -> "Bounds":
        """Ensure the rectangle has a positive extent on both axes."""
        if self.north <= self.south:
            raise ValueError("north must be greater than south")
        if self.east <= self.west:
            raise ValueError("east must be greater than west")
        return self

    def contains(self, coordinates: Coordinates) -> bool:
        """Inclusive containment test on all four edges."""
        return (
            self.south <= coordinates.latitude <= self.north
            and self.west <= coordinates.longitude <= self.east
        )
