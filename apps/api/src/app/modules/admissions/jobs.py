"""
Admissions Background Jobs

Scheduled housekeeping for application forms held in process memory:
1. Close forms whose session has been idle longer than the session TTL,
   then forget in-memory fallback sessions idle for as long
2. Release attachment previews nobody released

Drafts saved to Redis need no job: their keys expire with the session.

Both jobs are idempotent and safe to trigger manually.
"""

import logging

from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.core.scheduler import register_job
from app.core.session import evict_idle_memory_sessions
from app.modules.admissions.attachments import preview_registry
from app.modules.admissions.registry import engine_registry

logger = logging.getLogger(__name__)

# Job IDs for registration and manual triggering
JOB_ID_EVICT_IDLE_SESSIONS = "admissions_evict_idle_sessions"
JOB_ID_RELEASE_STALE_PREVIEWS = "admissions_release_stale_previews"

JOB_INTERVAL_MINUTES = 15


async def evict_idle_application_sessions() -> None:
    """
    Close open forms idle for longer than the session TTL, releasing their
    previews, then drop fallback sessions that have expired the same way.
    """
    evicted = engine_registry.evict_idle(settings.session_ttl_seconds)
    if evicted:
        logger.info(f"Evicted {evicted} idle application form(s)")
    else:
        logger.debug("No idle application forms to evict")

    dropped = evict_idle_memory_sessions(
        settings.session_ttl_seconds, keep=engine_registry.session_ids()
    )
    if dropped:
        logger.info(f"Dropped {dropped} idle in-memory session(s)")


async def release_stale_previews() -> None:
    """Release previews older than the preview TTL that no open form still uses."""
    released = preview_registry.release_older_than(
        settings.preview_ttl_seconds, keep=engine_registry.preview_tokens()
    )
    if released:
        logger.info(f"Released {released} stale attachment preview(s)")
    else:
        logger.debug("No stale attachment previews to release")


def register_admissions_jobs() -> None:
    """
    Register admissions background jobs with the scheduler.

    Call during application startup, before the scheduler is started.
    """
    logger.info("Registering admissions background jobs...")

    register_job(
        job_id=JOB_ID_EVICT_IDLE_SESSIONS,
        func=evict_idle_application_sessions,
        trigger=IntervalTrigger(minutes=JOB_INTERVAL_MINUTES),
    )

    register_job(
        job_id=JOB_ID_RELEASE_STALE_PREVIEWS,
        func=release_stale_previews,
        trigger=IntervalTrigger(minutes=JOB_INTERVAL_MINUTES),
    )

    logger.info("Admissions background jobs registered successfully")
