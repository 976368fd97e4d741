"""
Location Schema

Pydantic models for representing normalized point records and the
typed failures produced while extracting them from raw input.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.geo import Coordinates


class Location(BaseModel):
    """A normalized point record with optional name, intensity and metadata."""

    model_config = ConfigDict(frozen=True)

    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    coordinates: Coordinates
    intensity: Optional[float] = Field(
        None, description="Heat weight, typically 0-1 but not enforced"
    )
    metadata: Optional[Dict[str, Any]] = Field(
        None, description="Free-form properties carried through untouched"
    )


class RecordFailureKind(str, Enum):
    """Why a single input record was rejected."""

    MISSING_COORDINATES = "missing_coordinates"
    INVALID_COORDINATE_RANGE = "invalid_coordinate_range"
    NON_NUMERIC_COORDINATE = "non_numeric_coordinate"


class RecordFailure(BaseModel):
    """A rejected record. Parsers turn these into entries of LoadResult.errors."""

    model_config = ConfigDict(frozen=True)

    kind: RecordFailureKind
    message: str
    latitude: Any = None
    longitude: Any = None

    def __str__(self) -> str:
        return self.message
