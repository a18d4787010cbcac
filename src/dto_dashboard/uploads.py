"""Upload trigger: push a file to blob storage and drive the pipeline estimate."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dto_dashboard.errors import UploadError
from dto_dashboard.models import Notification, NotificationLevel, PipelineEvent
from dto_dashboard.pipeline import PipelineSimulator
from dto_dashboard.storage import BlobStorageClient

logger = logging.getLogger(__name__)


@dataclass
class UploadedFile:
    name: str
    content: bytes
    content_type: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class UploadTrigger:
    def __init__(
        self,
        storage: BlobStorageClient,
        simulator: PipelineSimulator,
        publish: Callable[[PipelineEvent], Awaitable[None]],
    ):
        self._storage = storage
        self._simulator = simulator
        self._publish = publish

    async def upload(self, file: UploadedFile) -> None:
        """Upload one file; on failure the pipeline goes back to idle."""
        run = await self._simulator.on_upload_start()
        await self._notify("Uploading file...", "Transferring file to blob storage")

        try:
            await self._storage.upload_file(file.name, file.content, file.content_type)
        except UploadError as exc:
            logger.warning("Upload of %s failed: %s", file.name, exc)
            await self._simulator.on_upload_failed(run)
            await self._notify("Upload failed", str(exc), NotificationLevel.error)
            raise

        await self._simulator.on_upload_success(file.name)
        await self._notify(
            "Upload successful!",
            f"{file.name} uploaded. DTO extraction and analysis will be "
            "available in the datagrid shortly.",
            NotificationLevel.success,
        )

    async def _notify(
        self, title: str, description: str,
        level: NotificationLevel = NotificationLevel.info,
    ) -> None:
        await self._publish(PipelineEvent.notify(
            Notification(title=title, description=description, level=level),
        ))
