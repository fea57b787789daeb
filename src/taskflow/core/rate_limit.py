"""Rate limiting for the auth endpoints.

slowapi decorators keyed on client IP, stored in Redis when configured so
every worker shares the same counters.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.taskflow.core.config import get_settings
from src.taskflow.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Key rate limits on client IP only, never on client-controlled headers."""
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the slowapi limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend")
    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()
