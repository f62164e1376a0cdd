"""
Core module - Configuration, Redis, sessions, scheduling and rate limiting.
"""

from app.core.config import get_settings, settings
from app.core.redis import close_redis, get_redis, init_redis
from app.core.session import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
    get_session_id,
    get_session_store,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Redis
    "get_redis",
    "init_redis",
    "close_redis",
    # Sessions
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "get_session_id",
    "get_session_store",
]
