"""Pipeline status simulator.

The backend extracts and analyses uploaded documents on its own, without
reporting progress. The simulator estimates that progress for the dashboard
from fixed delays, then confirms persistence by looking the uploaded file up
in the catalog, retrying once. It always ends with persistence ready, even
when the record never shows up or the lookup fails.

    upload ready --1.5s--> extraction running --10s--> persistence running
        -> lookup: found -> ready
                   missing --2s--> lookup: found -> ready
                                           missing -> ready ("still processing")
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from dto_dashboard.catalog import find_by_file_name
from dto_dashboard.errors import DashboardError
from dto_dashboard.models import (
    CatalogRecord,
    Notification,
    NotificationLevel,
    PipelineEvent,
    PipelineStatus,
)
from dto_dashboard.pipeline import transitions
from dto_dashboard.pipeline.scheduler import Scheduler, TimerSet

logger = logging.getLogger(__name__)

Publish = Callable[[PipelineEvent], Awaitable[None]]

PIPELINE_COMPLETE = Notification(
    title="Pipeline complete!",
    description="File processed and saved to the catalog",
    level=NotificationLevel.success,
)
STILL_PROCESSING = Notification(
    title="Processing...",
    description="File is being processed. Check back in a moment.",
)
CLEARED = Notification(title="Cleared", description="Upload cleared")


@dataclass(frozen=True)
class PipelineDelays:
    extraction_start: float = 1.5
    extraction: float = 10.0
    persistence_retry: float = 2.0

    @property
    def worst_case(self) -> float:
        """Seconds from upload success to a guaranteed persistence ready."""
        return self.extraction_start + self.extraction + self.persistence_retry


class PipelineSimulator:
    def __init__(
        self,
        fetch_items: Callable[[], Awaitable[list[CatalogRecord]]],
        refetch: Callable[[], Awaitable[None]],
        scheduler: Scheduler,
        publish: Publish,
        delays: PipelineDelays = PipelineDelays(),
    ):
        self._fetch_items = fetch_items
        self._refetch = refetch
        self._timers = TimerSet(scheduler)
        self._publish = publish
        self.delays = delays
        self._status = transitions.IDLE
        self._file_name: str | None = None
        # Bumped whenever a run is superseded; callbacks of older runs bail out
        self._run = 0

    @property
    def status(self) -> PipelineStatus:
        return self._status

    @property
    def file_name(self) -> str | None:
        return self._file_name

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    async def on_upload_start(self) -> int:
        """Mark the upload running; returns the run to pass to on_upload_failed()."""
        run = self._supersede()
        await self._apply(transitions.start_upload(self._status))
        return run

    async def on_upload_success(self, file_name: str) -> None:
        run = self._supersede()
        self._file_name = file_name
        # Delays count from the transition, not from when subscribers hear of it
        self._timers.schedule(
            self.delays.extraction_start, partial(self._begin_extraction, run),
        )
        await self._apply(transitions.upload_succeeded(self._status))

    async def on_upload_failed(self, run: int) -> None:
        # A newer upload has started or succeeded since; leave its run alone
        if self._is_stale(run):
            return
        self._supersede()
        self._file_name = None
        await self._apply(transitions.clear(self._status))

    async def on_clear(self) -> None:
        self._supersede()
        self._file_name = None
        await self._apply(transitions.clear(self._status))
        await self._publish(PipelineEvent.notify(CLEARED))

    def close(self) -> None:
        """Cancel everything; nothing fires after teardown."""
        self._supersede()

    def _supersede(self) -> int:
        self._timers.cancel_all()
        self._run += 1
        return self._run

    def _is_stale(self, run: int) -> bool:
        return run != self._run

    async def _apply(self, status: PipelineStatus) -> None:
        if status == self._status:
            return
        self._status = status
        await self._publish(PipelineEvent.status_changed(status))

    async def _begin_extraction(self, run: int) -> None:
        if self._is_stale(run):
            return
        self._timers.schedule(
            self.delays.extraction, partial(self._finish_extraction, run),
        )
        await self._apply(transitions.extraction_started(self._status))

    async def _finish_extraction(self, run: int) -> None:
        if self._is_stale(run):
            return
        await self._apply(transitions.extraction_elapsed(self._status))
        await self._check_persistence(run, final=False)

    async def _retry_persistence(self, run: int) -> None:
        if self._is_stale(run):
            return
        await self._check_persistence(run, final=True)

    async def _check_persistence(self, run: int, final: bool) -> None:
        file_name = self._file_name
        # Surface whatever already landed, whatever the lookup says
        await self._refetch()
        if self._is_stale(run):
            return

        try:
            items = await self._fetch_items()
        except DashboardError as exc:
            logger.warning("Persistence check for %s failed: %s", file_name, exc)
            await self._refetch()
            if self._is_stale(run):
                return
            await self._apply(
                transitions.persistence_check_resolved(self._status, found=False, final=True),
            )
            await self._publish(PipelineEvent.notify(Notification(
                title="Catalog check failed",
                description=str(exc),
                level=NotificationLevel.warning,
            )))
            return

        if self._is_stale(run):
            return

        found = file_name is not None and find_by_file_name(items, file_name) is not None
        await self._apply(
            transitions.persistence_check_resolved(self._status, found=found, final=final),
        )
        if found:
            logger.info("Found %s in catalog", file_name)
            await self._publish(PipelineEvent.notify(PIPELINE_COMPLETE))
        elif final:
            logger.info("%s not in catalog after retry, giving up", file_name)
            await self._publish(PipelineEvent.notify(STILL_PROCESSING))
        else:
            self._timers.schedule(
                self.delays.persistence_retry, partial(self._retry_persistence, run),
            )
