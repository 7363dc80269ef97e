"""
Noteful Backend — Middleware & Health Tests
=============================================

What:  Request id propagation, access-log levels, rate limiting and the
       /health probe.
How:   Rate limiting is disabled for the main app in conftest, so it is
       exercised on a throwaway FastAPI app with a tiny limit.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from noteful.database import get_db_session
from noteful.main import create_app
from noteful.middleware.logging import level_for_status
from noteful.middleware.rate_limit import RateLimitMiddleware


def _limited_app(max_requests: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, max_requests=max_requests, window_seconds=60, enabled=True)

    @app.get("/ping")
    async def ping():
        return {"pong": True}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRequestId:

    @pytest.mark.asyncio
    async def test_client_id_echoed(self, test_client):
        response = await test_client.get("/api/folders", headers={"X-Request-ID": "abc12345"})
        assert response.headers["x-request-id"] == "abc12345"

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/folders")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_included_in_error_body(self, test_client):
        response = await test_client.get("/api/notes/bad", headers={"X-Request-ID": "req-42"})

        assert response.status_code == 400
        assert response.json()["request_id"] == "req-42"


class TestAccessLogLevel:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (204, logging.INFO), (400, logging.WARNING), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_follows_status(self, status, level):
        assert level_for_status(status) == level


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_blocks_after_limit(self):
        transport = ASGITransport(app=_limited_app(max_requests=2))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/ping")).status_code == 200
            assert (await client.get("/ping")).status_code == 200

            response = await client.get("/ping")

        assert response.status_code == 429
        assert int(response.headers["retry-after"]) > 0
        assert response.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_health_never_limited(self):
        transport = ASGITransport(app=_limited_app(max_requests=1))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            statuses = [(await client.get("/health")).status_code for _ in range(3)]

        assert statuses == [200, 200, 200]


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_unreachable(self):
        app = create_app()

        async def unreachable_session():
            session = MagicMock()
            session.execute = AsyncMock(
                side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
            )
            yield session

        app.dependency_overrides[get_db_session] = unreachable_session
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
