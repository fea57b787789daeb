"""Database engines: the async request-path engine and the migration URL."""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.taskflow.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def ssl_context_for(mode: str) -> ssl.SSLContext | None:
    """TLS context for a libpq-style ``sslmode`` name; None for ``disable``.

    ``prefer`` and ``require`` encrypt without verifying the server;
    ``verify-ca`` checks the chain and ``verify-full`` also the hostname.
    """
    if mode == "disable":
        return None

    context = ssl.create_default_context()
    if mode in ("verify-ca", "verify-full"):
        context.check_hostname = mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def sync_database_url(settings: Settings) -> str:
    """The configured URL without the asyncpg driver, for Alembic's psycopg2 engine."""
    return settings.database_url.replace("+asyncpg", "")


def build_engine(settings: Settings) -> AsyncEngine:
    connect_args: dict[str, Any] = {
        "statement_cache_size": settings.database_statement_cache_size,
    }
    context = ssl_context_for(settings.database_ssl_mode)
    if context is not None:
        connect_args["ssl"] = context

    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_engine() -> AsyncEngine:
    """Process-wide engine, built on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings())
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections; the next ``get_engine`` builds a new engine."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
