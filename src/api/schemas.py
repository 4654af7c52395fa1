"""Pydantic response schemas for the eventlens API.

These models define the JSON body of every interactive endpoint.  The
export path bypasses them and streams CSV instead.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.models.event import EventRecord, KeywordsResult, SearchOutcome, WeightedTerm


class SearchResponse(BaseModel):
    """One page of search results with the query echoed back."""

    events: list[EventRecord] = Field(default_factory=list)
    total: int = Field(default=0, description="Sum of sold counts across this page.")
    page: int = 1
    keyword: str = ""
    event_id: str = ""
    mtf: int | None = Field(default=None, description="Minimum term frequency (similarity only).")
    xdf: int | None = Field(default=None, description="Maximum document frequency (similarity only).")
    xqt: int | None = Field(default=None, description="Maximum query terms (similarity only).")

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> SearchResponse:
        params = outcome.similarity
        return cls(
            events=outcome.events,
            total=outcome.total,
            page=outcome.page,
            keyword=outcome.keyword,
            event_id=outcome.event_id,
            mtf=params.min_term_freq if params else None,
            xdf=params.max_doc_freq if params else None,
            xqt=params.max_query_terms if params else None,
        )


class KeywordsResponse(BaseModel):
    """Weighted keyphrases for one event."""

    eid: str = ""
    words: list[WeightedTerm] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: KeywordsResult) -> KeywordsResponse:
        return cls(eid=result.event_id, words=result.terms)


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str = "ok"
    version: str
    collaborators: dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str
