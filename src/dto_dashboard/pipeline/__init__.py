from dto_dashboard.pipeline.scheduler import AsyncioScheduler, Scheduler, TimerSet
from dto_dashboard.pipeline.simulator import PipelineDelays, PipelineSimulator

__all__ = [
    "AsyncioScheduler",
    "PipelineDelays",
    "PipelineSimulator",
    "Scheduler",
    "TimerSet",
]
