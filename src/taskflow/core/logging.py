"""Structured logging with structlog.

Every request binds ``request_id`` (and ``user_id`` once authenticated) into
context variables, so timer and ownership events carry them automatically.
"""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "asyncpg")

SHARED_PROCESSORS: list[structlog.typing.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderers(debug: bool) -> list[structlog.typing.Processor]:
    if debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging(debug: bool = False) -> None:
    """Configure stdlib logging and structlog.

    Args:
        debug: Colored console lines at DEBUG level instead of JSON at INFO.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=SHARED_PROCESSORS + _renderers(debug),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None, method: str | None = None, path: str | None = None
) -> None:
    """Bind the request correlation ID (and route, when known) to subsequent log calls."""
    if request_id:
        bind_contextvars(request_id=request_id)
    if method and path:
        bind_contextvars(method=method, path=path)


def bind_user_context(user_id: UUID) -> None:
    """Bind the authenticated user's ID to all subsequent log calls."""
    bind_contextvars(user_id=str(user_id))


def clear_request_context() -> None:
    clear_contextvars()
