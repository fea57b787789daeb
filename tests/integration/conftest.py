"""Integration fixtures: a migrated PostgreSQL database and an HTTP client.

These fixtures require the database at DATABASE_URL. Run them with
`pytest -m integration`; `pytest -m unit` needs no external services.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.taskflow.core import db
from src.taskflow.core import redis as redis_core
from src.taskflow.core.config import get_settings
from src.taskflow.core.db import run_migrations_sync
from src.taskflow.main import create_app
from src.taskflow.models import User
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import TestAccount, auth_headers


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Redis clients are bound to the event loop of the test that created them."""
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Engine on the test database with migrations applied."""
    await db.dispose_engine()

    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    await asyncio.to_thread(run_migrations_sync)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting rows. Tests commit explicitly."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


async def _create_account(engine: AsyncEngine, session: AsyncSession) -> TestAccount:
    user = UserFactory.build()
    session.add(user)
    await session.commit()
    return TestAccount(
        id=user.id,
        email=user.email,
        password=DEFAULT_TEST_PASSWORD,
        headers=auth_headers(user.id),
    )


async def _delete_account(engine: AsyncEngine, account: TestAccount) -> None:
    # Projects, tasks, entries, goals and tokens go with the user
    async with AsyncSession(engine) as session:
        await session.execute(delete(User).where(User.id == account.id))
        await session.commit()


@pytest.fixture
async def alice(engine: AsyncEngine, db_session: AsyncSession) -> AsyncGenerator[TestAccount]:
    account = await _create_account(engine, db_session)
    yield account
    await _delete_account(engine, account)


@pytest.fixture
async def bob(engine: AsyncEngine, db_session: AsyncSession) -> AsyncGenerator[TestAccount]:
    account = await _create_account(engine, db_session)
    yield account
    await _delete_account(engine, account)


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client against a fresh app instance."""
    await db.dispose_engine()

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    await db.dispose_engine()
