"""eventlens FastAPI application entry point.

Wires providers, services and routes together via dependency injection.
Settings are loaded once (``.env`` + environment + ``config/config.yaml``)
and handed to every component explicitly; a missing required value stops
the process before the server binds.

Also exposes ``build_components`` for CLI or scripting usage outside the
web server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_settings
from src.config.settings import Settings
from src.providers.keyphrase.yahoo_keyphrase_provider import YahooKeyphraseProvider
from src.providers.search.elasticsearch_provider import ElasticsearchProvider
from src.providers.store.sqlite_event_store import SQLiteEventStore
from src.services.identifier_resolver import IdentifierResolver
from src.services.keyword_extractor import KeywordExtractor
from src.services.record_hydrator import RecordHydrator
from src.services.search_service import SearchService
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def build_components(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct every provider and service for one process.

    Returns a flat dict of named components to be stored on ``app.state``.
    The caller owns ``http_client`` and must close it.
    """
    http_client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)

    # -- Providers --
    search_provider = ElasticsearchProvider(http_client=http_client, settings=settings)
    store = SQLiteEventStore(settings=settings)
    keyphrase_provider = YahooKeyphraseProvider(http_client=http_client, settings=settings)

    # -- Services --
    resolver = IdentifierResolver(search_provider, page_size=settings.page_size)
    hydrator = RecordHydrator(store, restore_rank_order=settings.restore_rank_order)
    search_service = SearchService(resolver=resolver, hydrator=hydrator)
    keyword_extractor = KeywordExtractor(store=store, keyphrase_provider=keyphrase_provider)

    return {
        "settings": settings,
        "http_client": http_client,
        "search_service": search_service,
        "keyword_extractor": keyword_extractor,
        "provider_list": [
            search_provider.get_provider_name(),
            store.get_provider_name(),
            keyphrase_provider.get_provider_name(),
        ],
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build components on startup and close the shared HTTP client on shutdown."""
    components = build_components(application.state.settings)
    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=application.state.settings.app_env,
        providers=components["provider_list"],
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Raises ConfigurationError when *settings* is omitted and the
    configuration on disk / in the environment is incomplete.
    """
    settings = settings or load_settings()
    configure_logging(
        log_level=settings.log_level,
        json_output=(settings.app_env == "production"),
    )

    application = FastAPI(
        title="eventlens API",
        version=_VERSION,
        description=(
            "Keyword and similar-event search over a full-text index, hydrated "
            "from the event store, plus keyphrase extraction for single events."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = settings

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


def serve(settings: Settings | None = None) -> None:
    """Run the application under uvicorn."""
    settings = settings or load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.app_host,
        port=settings.app_port,
    )


if __name__ == "__main__":
    serve()
