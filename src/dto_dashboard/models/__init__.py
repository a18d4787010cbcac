from dto_dashboard.models.catalog import CatalogRecord, ChunkRef, OcrRawEntry, ParameterValue
from dto_dashboard.models.enums import DtoResult, NotificationLevel, PipelineStage, StageStatus
from dto_dashboard.models.pipeline import Notification, PipelineEvent, PipelineStatus

__all__ = [
    "CatalogRecord",
    "ChunkRef",
    "DtoResult",
    "Notification",
    "NotificationLevel",
    "OcrRawEntry",
    "ParameterValue",
    "PipelineEvent",
    "PipelineStage",
    "PipelineStatus",
    "StageStatus",
]
