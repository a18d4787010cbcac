"""Shared fixtures: a manual clock for pipeline timers and sample catalog records."""

from __future__ import annotations

from typing import Any

import pytest

from dto_dashboard.models import CatalogRecord, PipelineEvent


class ManualTimer:
    def __init__(self, due: float, seq: int, callback):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose time only moves when a test calls advance()."""

    def __init__(self):
        self.now = 0.0
        self._timers: list[ManualTimer] = []

    def call_later(self, delay: float, callback) -> ManualTimer:
        timer = ManualTimer(self.now + delay, len(self._timers), callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self._timers if not t.cancelled and not t.fired]

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = timer.due
            timer.fired = True
            await timer.callback()
        self.now = target


class EventRecorder:
    def __init__(self):
        self.events: list[PipelineEvent] = []

    async def __call__(self, event: PipelineEvent) -> None:
        self.events.append(event)

    @property
    def titles(self) -> list[str]:
        return [e.notification.title for e in self.events if e.notification is not None]

    @property
    def statuses(self):
        return [e.status for e in self.events if e.status is not None]


def make_record(record_id: str = "doc-1", **fields: Any) -> CatalogRecord:
    data: dict[str, Any] = {
        "id": record_id,
        "file_name": f"{record_id}.pdf",
        "ingested_at": "2024-05-01T10:00:00Z",
        "chunks": [{"type": "pdf", "page": 1, "path": "p1.png", "note": ""}],
        "llm_description": "A 3-pole breaker.",
    }
    data.update(fields)
    return CatalogRecord.model_validate(data)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def sample_record() -> CatalogRecord:
    return make_record(
        "dto-42",
        file_name="breaker.pdf",
        ocr_samples="RATED 16A\n\n12\n  POLES 3  \r\nIP20",
        llm_motivation="Matches the datasheet.",
        parameters={
            "detected_type": {"value": "MCB", "confidence": 0.9},
            "detection_confidence": {"value": "0.87"},
            "rated_current": {"value": 16, "confidence": 0.8},
            "no_of_poles": 3,
            "breaking_capacity_ka": 6.0,
        },
    )
