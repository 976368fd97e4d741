"""
Ingest API Endpoint

Parses uploaded files, raw text and remote URLs into locations. Every
endpoint returns a LoadResult; per-record problems are reported in its
``errors`` list rather than as HTTP errors.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.ingest import IngestTextRequest, IngestUrlRequest
from app.schemas.load_result import ColumnMapping, FileFormat, LoadOptions, LoadResult
from app.services.file_loader import (
    UnsupportedFormatError,
    decode_bytes,
    file_loader_service,
    parse_text,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _optional_column(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _form_delimiter(value: str) -> str:
    # HTML selects cannot carry a literal tab
    return "\t" if value == "\\t" else value


@router.post("/text", response_model=LoadResult)
async def ingest_text(request: IngestTextRequest) -> LoadResult:
    """
    Parse text the client has already read.

    The format comes from ``options.format`` or the extension of
    ``filename``; without either, JSON is assumed.
    """
    logger.info(
        "Ingest text request: filename=%s, format=%s, length=%d",
        request.filename,
        request.options.format.value,
        len(request.text),
    )
    try:
        return parse_text(request.text, request.filename, request.options)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/file", response_model=LoadResult)
async def ingest_file(
    file: UploadFile = File(...),
    file_format: FileFormat = Form(FileFormat.AUTO, alias="format"),
    has_header: bool = Form(True),
    delimiter: str = Form(","),
    lat_column: str = Form("lat"),
    lng_column: str = Form("lng"),
    intensity_column: Optional[str] = Form("intensity"),
    name_column: Optional[str] = Form("name"),
    id_column: Optional[str] = Form("id"),
) -> LoadResult:
    """
    Parse an uploaded file.

    Column fields left blank are not mapped. Files that are not UTF-8
    text come back as a single-error result.
    """
    filename = file.filename or "upload"
    logger.info("Ingest file request: filename=%s, format=%s", filename, file_format.value)

    try:
        options = LoadOptions(
            format=file_format,
            has_header=has_header,
            delimiter=_form_delimiter(delimiter),
            column_mapping=ColumnMapping(
                lat=lat_column.strip() or "lat",
                lng=lng_column.strip() or "lng",
                intensity=_optional_column(intensity_column),
                name=_optional_column(name_column),
                id=_optional_column(id_column),
            ),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e

    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds {settings.MAX_UPLOAD_BYTES} bytes",
        )

    try:
        text = decode_bytes(content)
    except UnicodeDecodeError:
        logger.warning("Uploaded file %s is not valid UTF-8", filename)
        return LoadResult.failure(
            f'Failed to read file "{filename}": File is not valid UTF-8 text'
        )

    try:
        return parse_text(text, filename, options)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/url", response_model=LoadResult)
async def ingest_url(request: IngestUrlRequest) -> LoadResult:
    """
    Fetch a URL once and parse the response.

    Network failures and non-success responses are reported inside the
    returned LoadResult, not as HTTP errors.
    """
    logger.info("Ingest URL request: url=%s", request.url)
    return await file_loader_service.load_from_url(request.url, request.options)
