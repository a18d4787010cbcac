"""Session state of one dashboard process and the collaborators behind it."""

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable

from dto_dashboard.assistant import AssistantClient, ChatTranscript
from dto_dashboard.cache import CatalogCache
from dto_dashboard.catalog import CatalogClient
from dto_dashboard.config import Settings
from dto_dashboard.errors import ConfigurationError
from dto_dashboard.events import publish_pipeline_event
from dto_dashboard.models import CatalogRecord, Notification, PipelineEvent
from dto_dashboard.pipeline import AsyncioScheduler, PipelineDelays, PipelineSimulator, Scheduler
from dto_dashboard.storage import BlobStorageClient
from dto_dashboard.uploads import UploadTrigger

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 50


def _unavailable(error: ConfigurationError) -> Callable[[], Awaitable[list[CatalogRecord]]]:
    async def fetch_items() -> list[CatalogRecord]:
        raise error

    return fetch_items


class Dashboard:
    """Wires the catalog cache, pipeline simulator and upload trigger together.

    A collaborator passed as a ConfigurationError is disabled: catalog fetches
    fail with that error, and storage/assistant lookups re-raise it.
    """

    def __init__(
        self,
        catalog: CatalogClient | ConfigurationError,
        storage: BlobStorageClient | ConfigurationError,
        assistant: AssistantClient | ConfigurationError,
        scheduler: Scheduler | None = None,
        publisher: Callable[[PipelineEvent], Awaitable[None]] = publish_pipeline_event,
        delays: PipelineDelays = PipelineDelays(),
    ):
        self._catalog = catalog
        self._storage = storage
        self._assistant = assistant
        self._publisher = publisher

        fetch_items = (
            _unavailable(catalog) if isinstance(catalog, ConfigurationError)
            else catalog.fetch_items
        )
        self.cache = CatalogCache(fetch_items)
        self.simulator = PipelineSimulator(
            fetch_items=fetch_items,
            refetch=self.cache.refetch,
            scheduler=scheduler or AsyncioScheduler(),
            publish=self.publish,
            delays=delays,
        )
        self.notifications: deque[Notification] = deque(maxlen=MAX_NOTIFICATIONS)
        self._outbox: asyncio.Queue[PipelineEvent] = asyncio.Queue()
        self._relay: asyncio.Task | None = None
        self.transcripts: dict[str, ChatTranscript] = {}

    @property
    def config_errors(self) -> dict[str, ConfigurationError]:
        collaborators = {
            "catalog": self._catalog,
            "storage": self._storage,
            "assistant": self._assistant,
        }
        return {
            name: value for name, value in collaborators.items()
            if isinstance(value, ConfigurationError)
        }

    def uploader(self) -> UploadTrigger:
        if isinstance(self._storage, ConfigurationError):
            raise self._storage
        return UploadTrigger(self._storage, self.simulator, self.publish)

    def assistant(self) -> AssistantClient:
        if isinstance(self._assistant, ConfigurationError):
            raise self._assistant
        return self._assistant

    def transcript(self, record_id: str) -> ChatTranscript:
        if record_id not in self.transcripts:
            self.transcripts[record_id] = ChatTranscript(record_id=record_id)
        return self.transcripts[record_id]

    async def publish(self, event: PipelineEvent) -> None:
        """Record the event and queue it for the publisher without waiting on it."""
        if event.notification is not None:
            self.notifications.append(event.notification)
        self._outbox.put_nowait(event)

    async def flush(self) -> None:
        """Wait until every queued event has been handed to the publisher."""
        await self._outbox.join()

    async def _relay_events(self) -> None:
        # One consumer keeps events in publish order
        while True:
            event = await self._outbox.get()
            try:
                await self._publisher(event)
            except Exception:
                logger.exception("Failed to relay pipeline event")
            finally:
                self._outbox.task_done()

    async def start(self) -> None:
        if self._relay is None:
            self._relay = asyncio.get_running_loop().create_task(self._relay_events())
        await self.cache.load()

    def close(self) -> None:
        self.simulator.close()
        if self._relay is not None:
            self._relay.cancel()
            self._relay = None


def build_dashboard(settings: Settings) -> Dashboard:
    """Validate configuration once and build every collaborator from it."""
    timeout = settings.http_timeout_seconds

    try:
        catalog = CatalogClient(settings.catalog_config(), timeout=timeout)
    except ConfigurationError as exc:
        logger.error("Catalog disabled: %s", exc)
        catalog = exc

    try:
        storage = BlobStorageClient(settings.storage_config())
    except ConfigurationError as exc:
        logger.error("Uploads disabled: %s", exc)
        storage = exc

    try:
        assistant = AssistantClient(settings.assistant_config())
    except ConfigurationError as exc:
        logger.error("Assistant disabled: %s", exc)
        assistant = exc

    return Dashboard(
        catalog=catalog,
        storage=storage,
        assistant=assistant,
        delays=PipelineDelays(
            extraction_start=settings.pipeline_extraction_start_delay,
            extraction=settings.pipeline_extraction_duration,
            persistence_retry=settings.pipeline_persistence_retry_delay,
        ),
    )
