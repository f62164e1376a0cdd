"""
Redis Configuration

Redis clients for sessions and rate limiting.

Two clients share one Redis URL:
- an async client used for health checks
- a sync client used by the session store from its background worker
  thread, so form edits never wait on Redis
"""

import logging

import redis
from redis.asyncio import Redis, from_url

from app.core.config import settings

logger = logging.getLogger(__name__)

# Redis client instances
redis_client: Redis | None = None
session_redis_client: redis.Redis | None = None

# Session writes are best-effort; never hang a request on a slow Redis
SESSION_SOCKET_TIMEOUT_SECONDS = 0.5


async def init_redis() -> Redis:
    """
    Initialize Redis connections.

    Call this on application startup.
    """
    global redis_client, session_redis_client
    redis_client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    # Test connection
    await redis_client.ping()

    session_redis_client = redis.Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=SESSION_SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=SESSION_SOCKET_TIMEOUT_SECONDS,
    )
    return redis_client


async def get_redis() -> Redis | None:
    """
    Get the async Redis client instance.

    Returns None if Redis is not available (optional dependency).
    """
    return redis_client


def get_session_redis() -> redis.Redis | None:
    """Get the sync Redis client used by the session store, if connected."""
    return session_redis_client


def is_redis_available() -> bool:
    """Check if Redis client is initialized and available."""
    return redis_client is not None


async def close_redis() -> None:
    """Close Redis connections."""
    global redis_client, session_redis_client
    if redis_client:
        await redis_client.close()
        redis_client = None
    if session_redis_client:
        session_redis_client.close()
        session_redis_client = None
