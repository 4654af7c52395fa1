"""eventlens API layer: routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import ErrorResponse, HealthResponse, KeywordsResponse, SearchResponse

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "KeywordsResponse",
    "SearchResponse",
]
