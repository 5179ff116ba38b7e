"""
Catalog loading.

Reads the generated price catalog (cards-data.json) over HTTP or from
disk and turns it into an immutable Catalog.

A catalog that is simply not there (404, unreachable host, missing file)
is the common "no cached data" case: sources log it and return None so
callers can fall back to another data source. Data that was obtained but
cannot be parsed raises CatalogFormatError.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import httpx

from cardscout.config import settings
from cardscout.models.catalog import Catalog

logger = logging.getLogger(__name__)

CatalogSource = Callable[[], Awaitable[Catalog | None]]


class CatalogUnavailableError(Exception):
    """Raised when the catalog cannot be fetched or read."""

    pass


class CatalogFormatError(ValueError):
    """Raised when fetched catalog data is corrupted or has the wrong shape."""

    pass


def parse_catalog(raw: Any) -> Catalog:
    """
    Build a Catalog from a decoded JSON document.

    Raises:
        CatalogFormatError: If the document is not a catalog
    """
    if not isinstance(raw, dict):
        raise CatalogFormatError(f"Catalog must be a JSON object, got {type(raw).__name__}")
    try:
        return Catalog.from_dict(raw)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CatalogFormatError(f"Catalog data is malformed: {e!r}") from e


def decode_catalog(content: str | bytes) -> Catalog:
    """
    Decode and parse catalog JSON text.

    Raises:
        CatalogFormatError: If the JSON is corrupted or not a catalog
    """
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise CatalogFormatError(f"Catalog JSON is corrupted: {e}") from e
    return parse_catalog(raw)


async def fetch_catalog(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Catalog:
    """
    Fetch and parse the catalog from a URL.

    Args:
        url: Location of the generated catalog JSON
        client: Optional client for connection reuse
        timeout: Request timeout in seconds, defaults to settings

    Raises:
        CatalogUnavailableError: On a non-success status or transport error
        CatalogFormatError: If the response body is not a catalog
    """
    timeout = settings.request_timeout if timeout is None else timeout
    try:
        if client is not None:
            response = await client.get(url, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as session:
                response = await session.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CatalogUnavailableError(
            f"Failed to fetch catalog from {url}: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise CatalogUnavailableError(f"Failed to fetch catalog from {url}: {e}") from e

    return decode_catalog(response.content)


def read_catalog_file(path: Path) -> Catalog:
    """
    Read and parse the catalog from disk.

    Raises:
        CatalogUnavailableError: If the file doesn't exist
        CatalogFormatError: If the file is not a catalog
    """
    if not path.exists():
        raise CatalogUnavailableError(f"Card catalog not found at {path}")

    with open(path, "rb") as f:
        return decode_catalog(f.read())


class HttpCatalogSource:
    """Catalog source backed by an HTTP endpoint."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None) -> None:
        self.url = url
        self._client = client

    async def __call__(self) -> Catalog | None:
        try:
            return await fetch_catalog(self.url, client=self._client)
        except CatalogUnavailableError as e:
            logger.info("Local card catalog not available: %s", e)
            return None

    def __repr__(self) -> str:
        return f"HttpCatalogSource({self.url!r})"


class FileCatalogSource:
    """Catalog source backed by a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    async def __call__(self) -> Catalog | None:
        try:
            return read_catalog_file(self.path)
        except CatalogUnavailableError as e:
            logger.info("Local card catalog not available: %s", e)
            return None

    def __repr__(self) -> str:
        return f"FileCatalogSource({str(self.path)!r})"


def source_from_location(location: str) -> HttpCatalogSource | FileCatalogSource:
    """Pick a source for a URL or a filesystem path."""
    if location.startswith(("http://", "https://")):
        return HttpCatalogSource(location)
    return FileCatalogSource(location)


def default_catalog_source() -> HttpCatalogSource | FileCatalogSource:
    """Source configured by settings: catalog_url if set, else catalog_path."""
    return source_from_location(settings.catalog_url or settings.catalog_path)
