import enum


class StageStatus(str, enum.Enum):
    idle = "idle"
    running = "running"
    ready = "ready"


class PipelineStage(str, enum.Enum):
    upload = "upload"
    extraction = "extraction"
    persistence = "persistence"


class DtoResult(str, enum.Enum):
    success = "Success"
    fail = "Fail"


class NotificationLevel(str, enum.Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"
