from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.taskflow.api.middlewares import setup_middlewares
from src.taskflow.api.v1.router import api_router
from src.taskflow.core.config import get_settings
from src.taskflow.core.db import dispose_engine
from src.taskflow.core.exceptions import setup_exception_handlers
from src.taskflow.core.health import setup_health_endpoint, setup_metrics
from src.taskflow.core.logging import get_logger, setup_logging
from src.taskflow.core.rate_limit import limiter
from src.taskflow.core.redis import close_redis
from src.taskflow.core.shutdown import request_tracker

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and graceful shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    grace_period = settings.shutdown_grace_period
    logger.info("Shutdown initiated", in_flight_requests=request_tracker.in_flight_count)

    await request_tracker.start_shutdown()
    drained = await request_tracker.wait_for_drain(timeout=grace_period)
    if not drained:
        logger.warning(
            "Shutdown timeout, requests may not have completed",
            grace_period=grace_period,
            in_flight_requests=request_tracker.in_flight_count,
        )

    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and token management"},
    {"name": "users", "description": "Profile of the authenticated user"},
    {"name": "projects", "description": "Projects and their task lists"},
    {"name": "tasks", "description": "Tasks and their status"},
    {"name": "time", "description": "Timer, time entries and reports"},
    {"name": "goals", "description": "Daily, weekly and monthly goals"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Task, project and time tracking API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
