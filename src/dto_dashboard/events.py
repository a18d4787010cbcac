"""Redis pub/sub publisher for pipeline status and notifications."""

import logging

from dto_dashboard.models import PipelineEvent
from dto_dashboard.redis import get_async_redis

logger = logging.getLogger(__name__)

CHANNEL = "pipeline_events"


async def publish_pipeline_event(event: PipelineEvent) -> None:
    """Publish a pipeline event; failures are logged and swallowed."""
    try:
        r = get_async_redis()
        try:
            await r.publish(CHANNEL, event.model_dump_json(exclude_none=True))
        finally:
            await r.aclose()
    except Exception:
        logger.exception("Failed to publish pipeline event")
