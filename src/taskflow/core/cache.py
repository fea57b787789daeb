"""Revoked refresh-token cache.

The database is the source of truth for revocation. Redis only answers the
hot-path question "was this token revoked?" without a round trip to
PostgreSQL; when Redis is unavailable callers must fall back to the database.
"""

from src.taskflow.core.redis import get_redis

PREFIX_REVOKED_TOKEN = "revoked_refresh_token"


def _key(token_hash: str) -> str:
    return f"{PREFIX_REVOKED_TOKEN}:{token_hash}"


async def remember_revoked_token(token_hash: str, ttl: int) -> bool:
    """Cache a revoked token hash for ``ttl`` seconds.

    Returns:
        True if written to Redis, False if Redis is unavailable.
    """
    redis = await get_redis()
    if not redis:
        return False
    await redis.setex(_key(token_hash), ttl, "1")
    return True


async def remember_revoked_tokens(token_hashes: list[str], ttl: int) -> int:
    """Cache several revoked token hashes in one pipeline.

    Returns:
        Number of hashes written (0 if Redis is unavailable).
    """
    if not token_hashes:
        return 0
    redis = await get_redis()
    if not redis:
        return 0

    pipe = redis.pipeline()
    for token_hash in token_hashes:
        pipe.setex(_key(token_hash), ttl, "1")
    await pipe.execute()
    return len(token_hashes)


async def is_token_revoked(token_hash: str) -> bool | None:
    """Check the revocation cache.

    Returns:
        True: token is known to be revoked
        False: Redis confirmed the token is not in the cache
        None: Redis unavailable, caller must check the database
    """
    redis = await get_redis()
    if not redis:
        return None
    return await redis.get(_key(token_hash)) is not None
