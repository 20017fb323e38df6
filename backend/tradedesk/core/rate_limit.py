"""
Rate limiting backed by Redis counters.

A fixed window per client: the first request in a window creates the key
with a TTL, later ones increment it until the TTL runs out.
"""
import logging
from typing import Optional

from redis.exceptions import RedisError

from tradedesk.config import get_settings
from tradedesk.database.connections import get_redis_client

logger = logging.getLogger(__name__)


def rate_limit_key(ip: str, endpoint: str) -> str:
    return f"ratelimit:{endpoint}:{ip}"


async def check_rate_limit(
    ip: str,
    endpoint: str,
    limit: Optional[int] = None,
    window_seconds: Optional[int] = None,
) -> bool:
    """
    Check if a request should be rate limited.

    Args:
        ip: Client IP address
        endpoint: Bucket identifier ("global" for the process-wide limiter)
        limit: Max requests allowed (defaults to config value)
        window_seconds: Time window in seconds (defaults to config value)

    Returns:
        True if request is allowed, False if rate limited.
        Requests are allowed when Redis cannot be reached.
    """
    settings = get_settings()
    limit = limit if limit is not None else settings.rate_limit_max_requests
    window_seconds = (
        window_seconds if window_seconds is not None else settings.rate_limit_window_seconds
    )

    key = rate_limit_key(ip, endpoint)
    try:
        redis = await get_redis_client()
        current = await redis.incr(key)
        if current == 1:
            await redis.expire(key, window_seconds)
    except RedisError as e:
        logger.warning("Rate limiter unavailable, allowing request: %s", e)
        return True

    return current <= limit
