"""Release catalog client for phpmatrix.

Turns the JSON published by the PHP release service into
:class:`~phpmatrix.models.ReleaseDescriptor` objects. The service wraps
its releases in a ``data`` key, keyed by release id; plain lists and
unwrapped mappings are accepted as well so that local catalog files can
be written by hand.

Typical usage::

    from phpmatrix.utils.http import HTTPClient
    from phpmatrix.core.catalog import ReleaseCatalog

    async with HTTPClient() as client:
        releases = await ReleaseCatalog(client).fetch()
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional

from phpmatrix.exceptions import CatalogError
from phpmatrix.utils.http import HTTPClient
from phpmatrix.utils.logger import get_logger
from phpmatrix.constants import PHP_RELEASES_API
from phpmatrix.models.release import ReleaseDescriptor
from phpmatrix.utils.filesystem import PathLike, safe_read_file

logger = get_logger("core.catalog")

__all__ = ["ReleaseCatalog", "parse_catalog", "load_catalog_file"]


def _entries(payload: Any, source: Optional[str]) -> Iterable[Any]:
    """Return the raw release entries held by ``payload``."""
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return payload.values()

    raise CatalogError(
        f"Unexpected release catalog format: {type(payload).__name__}",
        catalog_url=source,
    )


def parse_catalog(payload: Any, *, source: Optional[str] = None) -> List[ReleaseDescriptor]:
    """Build release descriptors from a decoded catalog document.

    Entries that are not objects or carry no usable ``name`` are skipped.

    Args:
        payload: Decoded JSON document.
        source: Where the document came from, for error messages.

    Returns:
        Descriptors in document order.

    Raises:
        CatalogError: ``payload`` holds neither a list nor a mapping of
            releases.

    Example::

        >>> parse_catalog({"data": {"80100": {"name": "8.1", "isSecureVersion": True}}})
        [ReleaseDescriptor(name='8.1', is_future=False, is_end_of_life=False, is_secure=True)]
    """
    releases: List[ReleaseDescriptor] = []

    for entry in _entries(payload, source):
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object catalog entry %r", entry)
            continue

        release = ReleaseDescriptor.from_dict(entry)
        if release is None:
            logger.debug("Skipping catalog entry without a name: %r", entry)
            continue

        releases.append(release)

    logger.debug("Parsed %d release(s) from %s", len(releases), source or "catalog")
    return releases


def load_catalog_file(path: PathLike) -> List[ReleaseDescriptor]:
    """Read a release catalog from a local JSON file.

    Raises:
        FileOperationError: The file cannot be read.
        CatalogError: The content is not JSON or not a catalog.
    """
    content = safe_read_file(path)

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise CatalogError(
            f"Invalid JSON in release catalog {Path(path).name}: {exc.msg}",
            catalog_url=str(path),
        ) from exc

    return parse_catalog(payload, source=str(path))


class ReleaseCatalog:
    """Remote release catalog, fetched at most once per instance.

    Args:
        http_client: A pre-configured :class:`HTTPClient` (owns the
            connection pool).
        url: Catalog endpoint.
    """

    def __init__(self, http_client: HTTPClient, url: str = PHP_RELEASES_API) -> None:
        self.http_client = http_client
        self.url = url
        self._releases: Optional[List[ReleaseDescriptor]] = None

    async def fetch(self) -> List[ReleaseDescriptor]:
        """Return every release published by the catalog.

        Raises:
            NetworkError: The request failed after retries.
            CatalogError: The response is not a release catalog.
        """
        if self._releases is not None:
            return list(self._releases)

        logger.info("Fetching release catalog from %s", self.url)
        payload = await self.http_client.get_json(self.url)
        self._releases = parse_catalog(payload, source=self.url)
        return list(self._releases)
