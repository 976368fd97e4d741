"""
Load Options and Result Schemas

Pydantic models describing how raw input should be parsed and what every
parse operation returns.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.location import Location


class FileFormat(str, Enum):
    """Supported input formats. AUTO means detect from the file name or URL."""

    AUTO = "auto"
    JSON = "json"
    CSV = "csv"
    TSV = "tsv"
    GEOJSON = "geojson"


class ColumnMapping(BaseModel):
    """Which CSV/TSV columns feed each Location field. None disables a field."""

    lat: str = "lat"
    lng: str = "lng"
    intensity: Optional[str] = "intensity"
    name: Optional[str] = "name"
    id: Optional[str] = "id"


class LoadOptions(BaseModel):
    """Options shared by every loader entry point."""

    format: FileFormat = FileFormat.AUTO
    has_header: bool = True
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    column_mapping: ColumnMapping = Field(default_factory=ColumnMapping)


class LoadSummary(BaseModel):
    """Row accounting for a single load."""

    model_config = ConfigDict(frozen=True)

    total_rows: int = 0
    valid_locations: int = 0
    invalid_rows: int = 0


class LoadResult(BaseModel):
    """Locations, per-record errors and a summary returned by every load."""

    model_config = ConfigDict(frozen=True)

    locations: List[Location] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    summary: LoadSummary = Field(default_factory=LoadSummary)

    @classmethod
    def failure(cls, message: str) -> "LoadResult":
        """A result for input that could not be used at all."""
        return cls(locations=[], errors=[message], summary=LoadSummary())
