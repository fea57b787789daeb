"""Registration, login, refresh rotation and logout against PostgreSQL."""

from collections.abc import AsyncGenerator

import pytest
from httpx import AsyncClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.taskflow.models import User
from tests.factories import DEFAULT_TEST_PASSWORD

pytestmark = pytest.mark.integration


@pytest.fixture
async def registered_email(engine: AsyncEngine) -> AsyncGenerator[str]:
    email = "grace.hopper@example.com"
    yield email
    async with AsyncSession(engine) as session:
        await session.execute(delete(User).where(User.email == email))
        await session.commit()


async def test_register_login_refresh_logout(client: AsyncClient, registered_email: str):
    register = await client.post(
        "/api/v1/auth/register",
        json={
            "email": registered_email,
            "password": DEFAULT_TEST_PASSWORD,
            "full_name": "Grace Hopper",
        },
    )
    assert register.status_code == 201

    duplicate = await client.post(
        "/api/v1/auth/register",
        json={
            "email": registered_email.upper(),
            "password": DEFAULT_TEST_PASSWORD,
            "full_name": "Grace Again",
        },
    )
    assert duplicate.status_code == 409

    login = await client.post(
        "/api/v1/auth/login",
        json={"email": registered_email, "password": DEFAULT_TEST_PASSWORD},
    )
    assert login.status_code == 200
    tokens = login.json()

    me = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {tokens['access_token']}"}
    )
    assert me.json()["email"] == registered_email

    rotated = await client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )
    assert rotated.status_code == 200

    replay = await client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )
    assert replay.status_code == 401

    logout = await client.post(
        "/api/v1/auth/logout", json={"refresh_token": rotated.json()["refresh_token"]}
    )
    assert logout.status_code == 204


async def test_wrong_password_is_401(client: AsyncClient, alice):
    response = await client.post(
        "/api/v1/auth/login", json={"email": alice.email, "password": "not-the-password"}
    )

    assert response.status_code == 401


async def test_health_reports_database(client: AsyncClient):
    from src.taskflow.core.health import reset_health_cache

    reset_health_cache()
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "healthy"
    reset_health_cache()
