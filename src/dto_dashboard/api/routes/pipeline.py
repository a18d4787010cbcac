"""Pipeline status endpoints and the SSE event stream."""

import asyncio
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from dto_dashboard.api.deps import get_dashboard
from dto_dashboard.api.schemas.pipeline import NotificationsResponse, PipelineStatusResponse
from dto_dashboard.dashboard import Dashboard
from dto_dashboard.events import CHANNEL
from dto_dashboard.redis import get_async_redis

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pipeline"])


def _status(dashboard: Dashboard) -> PipelineStatusResponse:
    return PipelineStatusResponse(
        status=dashboard.simulator.status,
        file_name=dashboard.simulator.file_name,
    )


@router.get("/pipeline", response_model=PipelineStatusResponse)
async def get_pipeline(dashboard: Dashboard = Depends(get_dashboard)):
    return _status(dashboard)


@router.post("/pipeline/clear", response_model=PipelineStatusResponse)
async def clear_pipeline(dashboard: Dashboard = Depends(get_dashboard)):
    await dashboard.simulator.on_clear()
    return _status(dashboard)


@router.get("/pipeline/notifications", response_model=NotificationsResponse)
async def list_notifications(dashboard: Dashboard = Depends(get_dashboard)):
    return NotificationsResponse(notifications=list(dashboard.notifications))


async def _event_generator(redis) -> AsyncGenerator[str, None]:
    """Subscribe to Redis pub/sub and yield SSE events."""
    pubsub = redis.pubsub()
    await pubsub.subscribe(CHANNEL)
    try:
        while True:
            message = await pubsub.get_message(
                ignore_subscribe_messages=True, timeout=1.0,
            )
            if message is not None and message["type"] == "message":
                yield f"data: {message['data']}\n\n"
            else:
                yield ": keepalive\n\n"
                await asyncio.sleep(1)
    except asyncio.CancelledError:
        pass
    finally:
        await pubsub.unsubscribe(CHANNEL)
        await pubsub.aclose()
        await redis.aclose()


@router.get("/pipeline/stream")
async def pipeline_stream():
    redis = get_async_redis()
    return StreamingResponse(
        _event_generator(redis),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
