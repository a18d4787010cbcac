"""Latest catalog snapshot with load/error/refetch state."""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from dto_dashboard.catalog import format_catalog
from dto_dashboard.errors import DashboardError
from dto_dashboard.models import CatalogRecord

logger = logging.getLogger(__name__)

FetchItems = Callable[[], Awaitable[list[CatalogRecord]]]


class CatalogCache:
    """Holds the last successful catalog snapshot.

    A failed refresh records the error and keeps the previous records, so the
    dashboard never blanks on a transient failure. Concurrent loads are not
    deduplicated; the last one to finish wins.
    """

    def __init__(self, fetch_items: FetchItems):
        self._fetch_items = fetch_items
        self.records: dict[str, CatalogRecord] = {}
        self.loading = True
        self.error: DashboardError | None = None
        self.loaded_at: datetime | None = None

    @property
    def data(self) -> list[dict[str, CatalogRecord]]:
        return format_catalog(self.records.values())

    def get(self, record_id: str) -> CatalogRecord | None:
        return self.records.get(record_id)

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            items = await self._fetch_items()
        except DashboardError as exc:
            logger.warning("Catalog refresh failed: %s", exc)
            self.error = exc
        else:
            self.records = {item.id: item for item in items}
            self.loaded_at = datetime.now(timezone.utc)
            logger.info("Catalog refreshed: %d records", len(self.records))
        finally:
            self.loading = False

    refetch = load
