"""Datagrid rows and headline stats derived from a catalog snapshot."""

import math
from collections.abc import Iterable
from datetime import datetime, timezone

from pydantic import BaseModel

from dto_dashboard.models import CatalogRecord, DtoResult

NO_DATA_YET = "Awaiting first run"


class DisplayRow(BaseModel):
    id: str
    file_name: str
    file_type: str
    dto_result: DtoResult
    ingested_at: str | None = None


class CatalogStats(BaseModel):
    total: int
    success_count: int
    success_rate: int
    latest_ingested: str


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, as the dashboard displays."""
    return math.floor(value + 0.5)


def parse_timestamp(value: str | None) -> float:
    """Seconds since the epoch; missing or unparseable timestamps are 0."""
    if not value:
        return 0.0
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def map_rows(records: Iterable[CatalogRecord]) -> list[DisplayRow]:
    rows = [
        DisplayRow(
            id=record.id,
            file_name=record.file_name,
            file_type=record.file_type,
            dto_result=DtoResult.success if record.is_success else DtoResult.fail,
            ingested_at=record.ingested_at,
        )
        for record in records
    ]
    # Stable sort: ties keep catalog order
    rows.sort(key=lambda row: parse_timestamp(row.ingested_at), reverse=True)
    return rows


def summarize(rows: list[DisplayRow]) -> CatalogStats:
    total = len(rows)
    success_count = sum(1 for row in rows if row.dto_result == DtoResult.success)
    success_rate = round_half_up(success_count / total * 100) if total else 0
    latest = rows[0].ingested_at if rows and rows[0].ingested_at else NO_DATA_YET
    return CatalogStats(
        total=total,
        success_count=success_count,
        success_rate=success_rate,
        latest_ingested=latest,
    )
