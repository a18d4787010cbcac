"""Remote catalog client: list processed-document records."""

import logging
from collections.abc import Iterable

import httpx
from pydantic import TypeAdapter, ValidationError

from dto_dashboard.config import CatalogConfig
from dto_dashboard.errors import RemoteFetchError
from dto_dashboard.models import CatalogRecord

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[CatalogRecord])


class CatalogClient:
    """Read-only view of the catalog endpoint. Retry policy belongs to callers."""

    def __init__(
        self,
        config: CatalogConfig,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._endpoint = config.catalog_endpoint
        self._timeout = timeout
        self._transport = transport

    async def fetch_items(self) -> list[CatalogRecord]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.get(self._endpoint)
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"Failed to fetch catalog items: {exc}") from exc

        if resp.is_error:
            raise RemoteFetchError(
                f"Failed to fetch catalog items: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            items = _RECORDS.validate_python(resp.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteFetchError(f"Malformed catalog response: {exc}") from exc

        logger.debug("Fetched %d catalog items", len(items))
        return items


def format_catalog(items: Iterable[CatalogRecord]) -> list[dict[str, CatalogRecord]]:
    """Wrap each record as {id: record}, preserving order."""
    return [{item.id: item} for item in items]


def find_by_file_name(
    items: Iterable[CatalogRecord], file_name: str,
) -> CatalogRecord | None:
    for item in items:
        if item.file_name == file_name:
            return item
    return None
