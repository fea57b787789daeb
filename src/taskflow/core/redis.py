"""Optional Redis client with lazy connection and graceful fallback.

Redis backs the refresh-token revocation cache, the slowapi rate limiter
storage and the health check. Without ``REDIS_URL`` every caller degrades
to its database or in-memory path.
"""

from redis.asyncio import ConnectionPool, Redis

from src.taskflow.core.config import get_settings
from src.taskflow.core.logging import get_logger

logger = get_logger(__name__)

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_connection_attempted: bool = False


async def get_redis() -> Redis | None:
    """Return the shared client, or None when Redis is not configured or unreachable.

    A failed connection is not retried until ``close_redis()`` resets the state.
    """
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        return _redis
    if _connection_attempted:
        return None

    _connection_attempted = True
    settings = get_settings()
    if not settings.redis_url:
        logger.info("Redis not configured")
        return None

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    client = Redis(connection_pool=pool)
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Redis connection failed, continuing without it", error=str(e))
        await client.aclose()
        await pool.disconnect()
        return None

    _pool, _redis = pool, client
    logger.info("Redis connected")
    return _redis


async def close_redis() -> None:
    """Close the connection pool. Called during application shutdown."""
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        await _redis.aclose()
        logger.info("Redis connection closed")
    if _pool is not None:
        await _pool.disconnect()

    _redis = None
    _pool = None
    _connection_attempted = False


def reset_redis_state() -> None:
    """Forget the cached client without closing it (tests only)."""
    global _pool, _redis, _connection_attempted
    _redis = None
    _pool = None
    _connection_attempted = False
