"""Tests for the /health endpoint status rules and caching."""

import asyncio
from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.taskflow.core import health
from src.taskflow.core.shutdown import request_tracker

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_state() -> Generator[None]:
    health.reset_health_cache()
    request_tracker.reset()
    yield
    health.reset_health_cache()
    request_tracker.reset()


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    health.setup_health_endpoint(app)
    return TestClient(app)


def checks(database: str, redis: str):
    return (
        patch.object(health, "_check_database", AsyncMock(return_value=database)),
        patch.object(health, "_check_redis", AsyncMock(return_value=redis)),
    )


@pytest.mark.parametrize(
    ("database", "redis", "expected", "code"),
    [
        ("healthy", "healthy", "healthy", 200),
        ("healthy", "not_configured", "healthy", 200),
        ("healthy", "unhealthy: timeout", "degraded", 200),
        ("unhealthy: refused", "healthy", "unhealthy", 503),
    ],
)
def test_overall_status(client, database, redis, expected, code):
    db_check, redis_check = checks(database, redis)
    with db_check, redis_check:
        response = client.get("/health")

    assert response.status_code == code
    assert response.json()["status"] == expected


def test_second_call_is_served_from_cache(client):
    db_check, redis_check = checks("healthy", "healthy")
    with db_check as database, redis_check:
        first = client.get("/health").json()
        second = client.get("/health").json()

    assert first["cached"] is False
    assert second["cached"] is True
    assert database.await_count == 1


def test_draining_is_503(client):
    asyncio.run(request_tracker.start_shutdown())

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "draining"


def test_api_calls_are_refused_while_draining():
    from fastapi import Request

    from src.taskflow.api.middlewares import request_tracking_middleware

    app = FastAPI()
    health.setup_health_endpoint(app)

    @app.get("/api/v1/time/active")
    async def active() -> dict:
        return {"entry": None}

    @app.middleware("http")
    async def _tracking(request: Request, call_next):  # type: ignore[no-untyped-def]
        return await request_tracking_middleware(request, call_next)

    client = TestClient(app)
    assert client.get("/api/v1/time/active").status_code == 200

    asyncio.run(request_tracker.start_shutdown())
    refused = client.get("/api/v1/time/active")

    assert refused.status_code == 503
    assert refused.headers["Retry-After"] == "5"
    assert refused.json()["detail"] == "Server is shutting down"
