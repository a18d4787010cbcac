"""Estimated ingestion progress shown on the dashboard."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from dto_dashboard.models.enums import NotificationLevel, StageStatus


class PipelineStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    upload: StageStatus = StageStatus.idle
    extraction: StageStatus = StageStatus.idle
    persistence: StageStatus = StageStatus.idle


class Notification(BaseModel):
    title: str
    description: str
    level: NotificationLevel = NotificationLevel.info


class PipelineEvent(BaseModel):
    type: Literal["status", "notification"]
    status: PipelineStatus | None = None
    notification: Notification | None = None

    @classmethod
    def status_changed(cls, status: PipelineStatus) -> "PipelineEvent":
        return cls(type="status", status=status)

    @classmethod
    def notify(cls, notification: Notification) -> "PipelineEvent":
        return cls(type="notification", notification=notification)
