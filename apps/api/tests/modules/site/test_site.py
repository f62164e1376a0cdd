"""
API tests for landing page content and the health endpoints.
"""

import pytest


class TestSiteContent:
    @pytest.mark.asyncio
    async def test_get_content(self, client):
        response = await client.get("/api/v1/site/content")

        assert response.status_code == 200
        data = response.json()
        assert data["school_name"] == "Ambassador International School"
        assert {stat["label"] for stat in data["stats"]} >= {"Students Enrolled"}
        assert all(1 <= t["rating"] <= 5 for t in data["testimonials"])


class TestHealth:
    """Tests for the root and health endpoints."""

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_redis_not_initialized(self, client):
        response = await client.get("/debug/redis")

        assert response.json() == {"redis": "not initialized"}

    @pytest.mark.asyncio
    async def test_trigger_unknown_job(self, client):
        response = await client.post("/debug/jobs/not_a_job/trigger")

        assert response.status_code == 400
