"""Pipeline status and upload schemas."""

from pydantic import BaseModel

from dto_dashboard.models import Notification, PipelineStatus


class PipelineStatusResponse(BaseModel):
    status: PipelineStatus
    file_name: str | None = None


class NotificationsResponse(BaseModel):
    notifications: list[Notification]


class UploadResponse(BaseModel):
    filename: str
    size_bytes: int
    mime_type: str | None = None
    status: PipelineStatus
