"""
Ingest Request Schemas

Pydantic models for the ingestion API endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.load_result import LoadOptions


class IngestTextRequest(BaseModel):
    """Request schema for parsing raw text already held by the client."""

    text: str = Field(..., description="Raw file contents")
    filename: Optional[str] = Field(
        None, description="Used for format detection when options.format is auto"
    )
    options: LoadOptions = Field(default_factory=LoadOptions)


class IngestUrlRequest(BaseModel):
    """Request schema for loading data from a remote URL."""

    url: str = Field(..., min_length=1, description="http(s) URL to fetch once")
    options: LoadOptions = Field(default_factory=LoadOptions)
