"""API middleware: CORS, request logging, and error handling.

# ─── MIDDLEWARE EXECUTION ORDER ───────────────────────────────────────
#
# Starlette middleware is a stack (last added runs first):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # inner
#     app.add_middleware(RequestLoggingMiddleware)  # outer
#
#   Request flow:
#     Client → RequestLogging → ErrorHandling → route handler
#
# RequestLoggingMiddleware therefore sees the final status code, including
# the one ErrorHandlingMiddleware chose for a domain error.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.schemas import ErrorResponse
from src.utils.errors import EventLensError
from src.utils.logging import bind_request_id, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware; all origins are allowed unless a list is given."""
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration.

    Binds a ``request_id`` into structlog context vars for the duration of
    the request and echoes it in the ``X-Request-ID`` response header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = bind_request_id(request.headers.get("x-request-id"))
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )
            structlog.contextvars.clear_contextvars()


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert ``EventLensError`` subclasses into structured JSON errors.

    The status code comes from the exception class.  Stack traces are
    logged server-side only.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except EventLensError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(status_code=exc.status_code, content=body.model_dump())
