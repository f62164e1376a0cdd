"""
Session Store

Per-visitor key-value storage that lives as long as one browsing session.

The store is a port: the admissions engine only sees ``SessionStore``,
so tests (and deployments without Redis) can use the in-memory variant.
Every adapter is best-effort. Failures are logged and swallowed so a
broken store degrades to "nothing was saved" rather than an error.

Redis I/O never runs on the event loop. Writes and deletes are queued
on a single background worker and return at once; reads go through the
same worker, so a read always sees every write queued before it.
"""

import logging
import secrets
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol

import redis
from fastapi import Request, Response

from app.core.config import settings
from app.core.redis import get_session_redis

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 24

# One worker keeps session I/O in submission order
_session_io = ThreadPoolExecutor(max_workers=1, thread_name_prefix="session-io")


def _log_unexpected_failure(future: Future) -> None:
    error = future.exception()
    if error is not None:
        logger.error(f"Session store operation failed: {error}", exc_info=error)


def flush_session_writes() -> None:
    """Block until every queued session write has been sent."""
    _session_io.submit(lambda: None).result()


class SessionStore(Protocol):
    """Key-value store scoped to a single visitor session."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemorySessionStore:
    """Dict-backed session store for tests and Redis-less deployments."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = data if data is not None else {}
        self.last_used = time.monotonic()

    def read(self, key: str) -> str | None:
        self.last_used = time.monotonic()
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.last_used = time.monotonic()
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.last_used = time.monotonic()
        self.data.pop(key, None)


class RedisSessionStore:
    """
    Redis-backed session store.

    Keys are namespaced by session id and expire with the session TTL,
    so nothing outlives the visitor's session.

    ``write`` and ``delete`` are fire-and-forget. ``read`` blocks its
    caller until the worker answers, so call it off the event loop.
    """

    def __init__(self, client: redis.Redis, session_id: str, ttl_seconds: int):
        self.client = client
        self.session_id = session_id
        self.ttl_seconds = ttl_seconds

    def _key(self, key: str) -> str:
        return f"session:{self.session_id}:{key}"

    def _read_now(self, key: str) -> str | None:
        try:
            return self.client.get(self._key(key))
        except redis.RedisError as e:
            logger.warning(f"Session read failed for {self.session_id[:8]}: {e}")
            return None

    def _write_now(self, key: str, value: str) -> None:
        try:
            self.client.set(self._key(key), value, ex=self.ttl_seconds)
        except redis.RedisError as e:
            logger.warning(f"Session write failed for {self.session_id[:8]}: {e}")

    def _delete_now(self, key: str) -> None:
        try:
            self.client.delete(self._key(key))
        except redis.RedisError as e:
            logger.warning(f"Session delete failed for {self.session_id[:8]}: {e}")

    def read(self, key: str) -> str | None:
        return _session_io.submit(self._read_now, key).result()

    def write(self, key: str, value: str) -> None:
        _session_io.submit(self._write_now, key, value).add_done_callback(
            _log_unexpected_failure
        )

    def delete(self, key: str) -> None:
        _session_io.submit(self._delete_now, key).add_done_callback(_log_unexpected_failure)


# Fallback stores keyed by session id when Redis is unavailable.
# Note: This doesn't work across multiple server instances.
_memory_sessions: dict[str, InMemorySessionStore] = {}


def new_session_id() -> str:
    """Generate a new opaque session identifier."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def get_session_id(request: Request, response: Response) -> str:
    """
    FastAPI dependency resolving the visitor's session id.

    Reuses the session cookie when present, otherwise issues a new one.
    The cookie has no max-age, so it ends with the browser session.
    """
    session_id = request.cookies.get(settings.session_cookie_name)
    if not session_id:
        session_id = new_session_id()
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session_id,
            httponly=True,
            samesite="lax",
            secure=settings.is_production,
        )
    return session_id


def get_session_store(session_id: str) -> SessionStore:
    """
    Build the session store for a session id.

    Uses Redis when connected, falling back to process memory.
    """
    client = get_session_redis()
    if client is not None:
        return RedisSessionStore(client, session_id, settings.session_ttl_seconds)

    store = _memory_sessions.get(session_id)
    if store is None:
        store = InMemorySessionStore()
        _memory_sessions[session_id] = store
    return store


def evict_idle_memory_sessions(max_idle_seconds: float, keep: set[str] | None = None) -> int:
    """
    Forget fallback in-memory sessions unused for ``max_idle_seconds``.

    Mirrors the Redis key TTL for deployments running without Redis.

    Args:
        max_idle_seconds: Idle time after which a session is dropped
        keep: Session ids that must survive regardless of age

    Returns:
        Number of sessions dropped
    """
    keep = keep or set()
    cutoff = time.monotonic() - max_idle_seconds
    idle = [
        session_id
        for session_id, store in _memory_sessions.items()
        if store.last_used < cutoff and session_id not in keep
    ]
    for session_id in idle:
        del _memory_sessions[session_id]
    return len(idle)


__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "new_session_id",
    "get_session_id",
    "get_session_store",
    "evict_idle_memory_sessions",
    "flush_session_writes",
]
