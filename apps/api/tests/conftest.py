"""
Shared fixtures for API tests.

The HTTP client talks to the app in-process through ASGITransport, which
skips the lifespan, so Redis is never connected: sessions and rate limits
fall back to process memory and are reset around every test.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core import rate_limit, session
from app.main import app
from app.modules.admissions.attachments import preview_registry
from app.modules.admissions.registry import engine_registry


@pytest.fixture(autouse=True)
def reset_process_state():
    """Forget open forms, previews, memory sessions and rate limit counters."""

    def _reset():
        engine_registry._entries.clear()
        preview_registry._previews.clear()
        session._memory_sessions.clear()
        rate_limit.reset_memory_store()

    _reset()
    yield
    _reset()


@pytest_asyncio.fixture
async def client():
    """HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
