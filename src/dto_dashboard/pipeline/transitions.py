"""Pure stage transitions for the pipeline estimate.

Each function takes the current status and returns the next one. A transition
whose predecessor stage has not been reached returns the status unchanged, so
no stage ever runs ahead of the one before it.
"""

from dto_dashboard.models import PipelineStatus, StageStatus

IDLE = PipelineStatus()


def start_upload(status: PipelineStatus) -> PipelineStatus:
    return PipelineStatus(upload=StageStatus.running)


def upload_succeeded(status: PipelineStatus) -> PipelineStatus:
    return PipelineStatus(upload=StageStatus.ready)


def extraction_started(status: PipelineStatus) -> PipelineStatus:
    if status.upload != StageStatus.ready or status.extraction != StageStatus.idle:
        return status
    return status.model_copy(update={"extraction": StageStatus.running})


def extraction_elapsed(status: PipelineStatus) -> PipelineStatus:
    if status.extraction != StageStatus.running:
        return status
    return status.model_copy(update={
        "extraction": StageStatus.ready,
        "persistence": StageStatus.running,
    })


def persistence_check_resolved(
    status: PipelineStatus, found: bool, final: bool,
) -> PipelineStatus:
    """Finish persistence when the record showed up, or when out of retries."""
    if status.persistence != StageStatus.running:
        return status
    if found or final:
        return status.model_copy(update={"persistence": StageStatus.ready})
    return status


def clear(status: PipelineStatus) -> PipelineStatus:
    return IDLE
