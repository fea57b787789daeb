"""In-flight request accounting for graceful shutdown."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint

from src.taskflow.core.shutdown import request_tracker

UNTRACKED_PATHS = frozenset({"/health", "/metrics"})


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Count API calls while running; answer 503 to new ones once draining."""
    if request.url.path in UNTRACKED_PATHS:
        return await call_next(request)

    if request_tracker.is_shutting_down:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Server is shutting down", "request_id": correlation_id.get()},
            headers={"Retry-After": "5", "Connection": "close"},
        )

    async with request_tracker.track_request():
        return await call_next(request)
