"""
File Loader Service

Front door for the ingestion pipeline. Detects the input format from an
explicit option or the file name / URL extension and dispatches to the
matching parser.

File reads and URL fetches are the only awaits. Each is attempted exactly
once; any I/O or network failure is converted into a single-error
LoadResult at this boundary and never propagates to the caller.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union
from urllib.parse import urlparse

import anyio
import httpx

from app.schemas.load_result import FileFormat, LoadOptions, LoadResult
from app.services.format_parsers import parse_csv, parse_geojson, parse_json

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

EXTENSION_FORMATS = {
    "json": FileFormat.JSON,
    "csv": FileFormat.CSV,
    "tsv": FileFormat.TSV,
    "txt": FileFormat.TSV,
    "geojson": FileFormat.GEOJSON,
}

TAB = "\t"


class FileLoaderError(Exception):
    """Base exception for file loader errors."""


class TransportError(FileLoaderError):
    """Raised when a file cannot be read or a URL cannot be fetched."""


class UnsupportedFormatError(FileLoaderError, ValueError):
    """Raised when no parser exists for the requested format."""


def detect_format(name: str) -> FileFormat:
    """
    Detect the input format from a file name or URL.

    Only the final path segment's extension is used; URL query strings and
    fragments are ignored. Unknown extensions fall back to JSON.
    """
    path = urlparse(name).path if "://" in name else name
    segment = path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in segment:
        return FileFormat.JSON
    extension = segment.rsplit(".", 1)[-1].lower()
    return EXTENSION_FORMATS.get(extension, FileFormat.JSON)


def resolve_format(name: Optional[str], options: LoadOptions) -> FileFormat:
    """Explicit option first, then the name's extension, then JSON."""
    if options.format != FileFormat.AUTO:
        return options.format
    if name:
        return detect_format(name)
    return FileFormat.JSON


def parse_text(
    text: str, name: Optional[str] = None, options: Optional[LoadOptions] = None
) -> LoadResult:
    """
    Parse already-loaded text with the parser for its format.

    TSV input is parsed as CSV with the delimiter forced to a tab,
    regardless of any delimiter in *options*.

    Raises:
        UnsupportedFormatError: If the resolved format has no parser
    """
    options = options or LoadOptions()
    file_format = resolve_format(name, options)
    logger.debug("Parsing %s as %s", name or "<text>", file_format.value)

    if file_format == FileFormat.JSON:
        return parse_json(text)
    if file_format == FileFormat.CSV:
        return parse_csv(text, options)
    if file_format == FileFormat.TSV:
        return parse_csv(text, options.model_copy(update={"delimiter": TAB}))
    if file_format == FileFormat.GEOJSON:
        return parse_geojson(text)
    raise UnsupportedFormatError(f"Unsupported file format: {file_format.value}")


def decode_bytes(content: bytes) -> str:
    """Decode UTF-8 content, tolerating a byte-order mark."""
    return content.decode("utf-8-sig")


class FileLoaderService:
    """
    Service for loading location data from files and URLs.

    Holds a lazily created httpx client for URL fetches.
    """

    def __init__(self):
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client used for URL fetches.

        The client keeps httpx's default timeout.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        return self._client

    async def load_from_file(
        self, path: PathLike, options: Optional[LoadOptions] = None
    ) -> LoadResult:
        """
        Read a UTF-8 file and parse it.

        Args:
            path: Path of the file to read
            options: Format, delimiter, header and column mapping options

        Returns:
            LoadResult; a single-error result if the file could not be read
        """
        name = os.fspath(path)
        try:
            text = await self._read_file(name)
        except TransportError as e:
            logger.warning("Failed to read file %s: %s", name, str(e))
            return LoadResult.failure(f'Failed to read file "{Path(name).name}": {str(e)}')

        return parse_text(text, name, options)

    async def load_from_url(
        self, url: str, options: Optional[LoadOptions] = None
    ) -> LoadResult:
        """
        Fetch a URL once and parse the response body.

        Args:
            url: http(s) URL to fetch
            options: Format, delimiter, header and column mapping options

        Returns:
            LoadResult; a single-error result on non-success status or
            network failure
        """
        try:
            text = await self._fetch(url)
            return parse_text(text, url, options)
        except (TransportError, UnsupportedFormatError) as e:
            logger.warning("Failed to load from URL %s: %s", url, str(e))
            return LoadResult.failure(f"Failed to load from URL: {str(e)}")

    async def load_many(
        self, sources: Iterable[PathLike], options: Optional[LoadOptions] = None
    ) -> List[LoadResult]:
        """
        Load several files and/or URLs strictly in submission order.

        A failure in one source does not affect the others.
        """
        results: List[LoadResult] = []
        for source in sources:
            name = os.fspath(source)
            if name.startswith(("http://", "https://")):
                results.append(await self.load_from_url(name, options))
            else:
                results.append(await self.load_from_file(name, options))
        return results

    async def _read_file(self, name: str) -> str:
        try:
            content = await anyio.Path(name).read_bytes()
            return decode_bytes(content)
        except OSError as e:
            raise TransportError(e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise TransportError("File is not valid UTF-8 text") from e
        except ValueError as e:
            # e.g. a path with an embedded null byte
            raise TransportError(str(e)) from e

    async def _fetch(self, url: str) -> str:
        client = self._get_client()
        try:
            response = await client.get(url)
        except httpx.InvalidURL as e:
            raise TransportError(f"Invalid URL: {str(e)}") from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise TransportError(f"HTTP {response.status_code}: {response.reason_phrase}")

        try:
            return decode_bytes(response.content)
        except UnicodeDecodeError as e:
            raise TransportError("Response is not valid UTF-8 text") from e

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance for dependency injection
file_loader_service = FileLoaderService()
