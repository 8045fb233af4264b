"""Redis client for short-lived login state."""

from redis.asyncio import Redis

from chatauth.config import RedisSettings


def create_redis_client(settings: RedisSettings) -> Redis:
    """Create async Redis client.

    Args:
        settings: Redis settings with connection URL

    Returns:
        Redis client returning decoded strings
    """
    return Redis.from_url(settings.url, decode_responses=True)
