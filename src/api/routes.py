"""HTTP routes for event search and keyword extraction.

# ─── ROUTE MAP ────────────────────────────────────────────────────────
#
# Endpoint            Method  Description
# ─────────────────────────────────────────────────────────────────────
# /search/keyword     GET     q=<keyword>&p=<page>[&csv]
# /search/similar     GET     q=<event id>&p=<page>&mtf&xdf&xqt[&csv]
# /keywords           GET     eid=<event id>
# /health             GET     Liveness + configured collaborators
#
# Services are read from ``request.app.state`` (populated by the lifespan
# in main.py), the same way for every route.  Integer parameters are
# parsed leniently: a missing or unparsable value falls back to its
# default instead of failing the request.
#
# The ``csv`` flag switches a search to the flat export.  The export
# path has its own similarity defaults (1, 1, 1).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import RedirectResponse

from src.api.schemas import HealthResponse, KeywordsResponse, SearchResponse
from src.models.event import (
    EXPORT_SIMILARITY_DEFAULTS,
    INTERACTIVE_SIMILARITY_DEFAULTS,
    SearchOutcome,
    SimilarityParams,
)
from src.services.export_formatter import export_filename, render_csv
from src.services.keyword_extractor import KeywordExtractor
from src.services.search_service import SearchService
from src.utils.logging import get_logger
from src.utils.pagination import parse_decimal

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(tags=["search"])

_VERSION = "0.1.0"


# ── Service accessors ─────────────────────────────────────────────────
def _get_search_service(request: Request) -> SearchService:
    svc = getattr(request.app.state, "search_service", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Search service unavailable")
    return svc


def _get_keyword_extractor(request: Request) -> KeywordExtractor:
    svc = getattr(request.app.state, "keyword_extractor", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Keyword extractor unavailable")
    return svc


# ── Query parsing ─────────────────────────────────────────────────────
def _first(request: Request, name: str) -> str | None:
    """Return the first value of query parameter *name*, if present."""
    values = request.query_params.getlist(name)
    return values[0] if values else None


def _int_param(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    value = parse_decimal(raw)
    return default if value is None else value


def _similarity_params(request: Request, defaults: SimilarityParams) -> SimilarityParams:
    return SimilarityParams(
        min_term_freq=_int_param(_first(request, "mtf"), defaults.min_term_freq),
        max_doc_freq=_int_param(_first(request, "xdf"), defaults.max_doc_freq),
        max_query_terms=_int_param(_first(request, "xqt"), defaults.max_query_terms),
    )


def _csv_response(outcome: SearchOutcome, query_value: str) -> Response:
    filename = export_filename(query_value, outcome.page)
    _logger.info("export_rendered", filename=filename, rows=len(outcome.events))
    return Response(
        content=render_csv(outcome),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# ── Keyword search ────────────────────────────────────────────────────
@router.get("/search/keyword", response_model=SearchResponse)
async def keyword_search(request: Request) -> Any:
    """Search events by free text, as JSON or as a CSV attachment."""
    svc = _get_search_service(request)
    keyword = _first(request, "q")
    page = _int_param(_first(request, "p"), 1)

    if "csv" in request.query_params:
        if not keyword:
            return RedirectResponse(url="/search/keyword", status_code=302)
        outcome = await svc.search_by_keyword(keyword, page)
        return _csv_response(outcome, keyword)

    outcome = await svc.search_by_keyword(keyword, page)
    return SearchResponse.from_outcome(outcome)


# ── Similarity search ─────────────────────────────────────────────────
@router.get("/search/similar", response_model=SearchResponse)
async def similar_search(request: Request) -> Any:
    """Search events similar to a reference event."""
    svc = _get_search_service(request)
    event_id = _first(request, "q")
    page = _int_param(_first(request, "p"), 1)

    if "csv" in request.query_params:
        if not event_id:
            return RedirectResponse(url="/search/similar", status_code=302)
        params = _similarity_params(request, EXPORT_SIMILARITY_DEFAULTS)
        outcome = await svc.search_similar(event_id, page, params)
        return _csv_response(outcome, event_id)

    params = _similarity_params(request, INTERACTIVE_SIMILARITY_DEFAULTS)
    outcome = await svc.search_similar(event_id, page, params)
    return SearchResponse.from_outcome(outcome)


# ── Keyword extraction ────────────────────────────────────────────────
@router.get("/keywords", response_model=KeywordsResponse)
async def keywords(request: Request) -> KeywordsResponse:
    """Weighted keyphrases for one event; unknown events give an empty list."""
    extractor = _get_keyword_extractor(request)
    event_id = _first(request, "eid")
    if not event_id:
        return KeywordsResponse()

    result = await extractor.extract_keywords(event_id)
    return KeywordsResponse.from_result(result)


# ── Health ────────────────────────────────────────────────────────────
@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    settings = getattr(request.app.state, "settings", None)
    collaborators = settings.describe_collaborators() if settings is not None else {}
    return HealthResponse(version=_VERSION, collaborators=collaborators)
