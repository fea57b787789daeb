"""Infrastructure error type and exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.taskflow.core.logging import get_logger

logger = get_logger(__name__)


class InternalError(Exception):
    """Storage or transport failure inside a service.

    Raised after the unit of work has been rolled back. Domain rejections
    (not found, forbidden, conflicts) are returned as outcomes instead and
    never surface as this error.
    """

    def __init__(self, operation: str, message: str = "Storage operation failed"):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class HTTPErrorWithFields(HTTPException):
    """HTTPException whose response body carries extra top-level fields."""

    def __init__(self, status_code: int, detail: str, fields: dict[str, object]):
        super().__init__(status_code=status_code, detail=detail)
        self.fields = fields


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                **getattr(exc, "fields", {}),
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(InternalError)
    async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
        request_id = correlation_id.get()
        logger.error(
            "Storage failure",
            operation=exc.operation,
            request_id=request_id,
            path=request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
