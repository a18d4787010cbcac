import logging
from typing import Any

from fastapi import APIRouter, Depends

from dto_dashboard.api.deps import get_dashboard
from dto_dashboard.dashboard import Dashboard
from dto_dashboard.redis import get_async_redis

logger = logging.getLogger(__name__)
router = APIRouter(tags=["system"])


@router.get("/system/health")
async def health_check(dashboard: Dashboard = Depends(get_dashboard)) -> dict[str, Any]:
    """Report collaborator configuration, Redis connectivity and catalog state."""
    cache = dashboard.cache
    config_errors = dashboard.config_errors

    # Redis carries notifications and the SSE stream
    try:
        redis = get_async_redis()
        await redis.ping()
        await redis.aclose()
        redis_status = "ok"
    except Exception as e:
        logger.error("Redis health check failed: %s", e)
        redis_status = f"error: {e}"

    degraded = bool(config_errors) or cache.error is not None or redis_status != "ok"
    return {
        "status": "degraded" if degraded else "ok",
        "configuration": {
            name: str(config_errors[name]) if name in config_errors else "ok"
            for name in ("catalog", "storage", "assistant")
        },
        "redis": redis_status,
        "catalog": {
            "records": len(cache.records),
            "loading": cache.loading,
            "error": str(cache.error) if cache.error else None,
            "loaded_at": cache.loaded_at.isoformat() if cache.loaded_at else None,
        },
    }
