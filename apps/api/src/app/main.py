"""
Ambassador International School API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Redis connection (sessions and rate limiting)
- Background job scheduler
- CORS middleware
- API routing and static images
- Health check endpoints
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api import api_router
from app.core.config import settings
from app.core.redis import close_redis, init_redis
from app.core.scheduler import list_registered_jobs, start_scheduler, stop_scheduler, trigger_job_manually
from app.core.session import flush_session_writes
from app.modules.admissions import register_admissions_jobs
from app.modules.gallery import router as gallery_router


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Redis connection
    - Background job scheduler
    """
    # Startup
    print(f"Starting AIS API in {settings.python_env} mode...")

    # Initialize Redis
    try:
        await init_redis()
        print("[OK] Redis connected")
    except Exception as e:
        print(f"[FAIL] Redis connection failed: {e}")
        print("[WARN] Falling back to in-memory sessions")
        await close_redis()
        if settings.is_production:
            raise

    # Initialize Background Job Scheduler
    try:
        register_admissions_jobs()
        await start_scheduler()
        print("[OK] Background scheduler started")
    except Exception as e:
        print(f"[FAIL] Background scheduler failed to start: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    print("Shutting down AIS API...")

    await stop_scheduler()
    print("[OK] Background scheduler stopped")

    await asyncio.to_thread(flush_session_writes)
    await close_redis()
    print("[OK] Cleanup complete")


app = FastAPI(
    title="AIS API",
    description="Ambassador International School website and admissions API",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

# Image listing keeps the path the landing page already fetches
app.include_router(gallery_router, prefix="/api", tags=["Gallery"])

if settings.images_dir.is_dir():
    app.mount("/images", StaticFiles(directory=settings.images_dir), name="images")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to the Ambassador International School API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint."""
    return {"status": "ready"}


@app.get("/debug/redis", tags=["Debug"])
async def debug_redis():
    """Test Redis connection."""
    from app.core import redis as redis_state

    try:
        if redis_state.redis_client:
            await redis_state.redis_client.ping()
            return {"redis": "connected"}
        return {"redis": "not initialized"}
    except Exception as e:
        return {"redis": "error", "message": str(e)}


# ============================================
# Background Job Debug Endpoints
# ============================================
# Manual triggering for testing. In production, jobs run on schedule.


@app.get("/debug/jobs", tags=["Debug"])
async def list_jobs():
    """List all registered background jobs and their status."""
    return {"jobs": list_registered_jobs()}


@app.post("/debug/jobs/{job_id}/trigger", tags=["Debug"])
async def trigger_job(job_id: str):
    """
    Manually trigger a background job for testing.

    Args:
        job_id: The ID of the job to trigger. Available jobs:
            - admissions_evict_idle_sessions
            - admissions_release_stale_previews

    Returns:
        Job execution result including status and any errors.

    Raises:
        HTTPException 400: If job_id is not found.
    """
    try:
        return await trigger_job_manually(job_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
