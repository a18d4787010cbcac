from redis.asyncio import from_url as redis_from_url

from dto_dashboard.config import get_settings


def get_async_redis():
    """Create an async Redis client whose connects and commands time out."""
    settings = get_settings()
    return redis_from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=settings.redis_timeout_seconds,
        socket_timeout=settings.redis_timeout_seconds,
    )
