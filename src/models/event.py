"""Pydantic v2 models for the event search and keyword flows.

All models use frozen config (immutable): a record is built once by the
store provider and only read afterwards.  Counts stay numeric-as-text
exactly as the store returns them; aggregation parses them leniently.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Column order the hydration SELECT must follow.
EVENT_COLUMNS: tuple[str, ...] = (
    "event_id",
    "name",
    "subtitle",
    "user_id",
    "user_name",
    "datetime",
    "venue_name",
    "address",
    "seats_sold",
    "seats_max",
)


class EventRecord(BaseModel):
    """A single hydrated event row."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(description="Event identifier, as indexed by the search backend.")
    name: str = ""
    subtitle: str = ""
    user_id: str = Field(default="", description="Owner (organiser) identifier.")
    user_name: str = Field(default="", description="Owner display name.")
    datetime: str = Field(default="", description="Event date/time as stored.")
    venue_name: str = ""
    address: str = ""
    seats_sold: str = Field(default="", description="Sold count, numeric-as-text.")
    seats_max: str = Field(default="", description="Capacity, numeric-as-text.")

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> EventRecord:
        """Build a record from a positional store row in :data:`EVENT_COLUMNS` order.

        ``NULL`` columns become empty strings; non-string values are
        stringified so numeric columns survive drivers that type them.
        """
        if len(row) < len(EVENT_COLUMNS):
            msg = f"Expected {len(EVENT_COLUMNS)} columns, got {len(row)}"
            raise ValueError(msg)
        values = {
            column: "" if value is None else str(value)
            for column, value in zip(EVENT_COLUMNS, row)
        }
        return cls(**values)

    def to_export_row(self) -> list[str]:
        """Return the flat export columns (capacity is not exported)."""
        return [
            self.event_id,
            self.name,
            self.subtitle,
            self.user_id,
            self.user_name,
            self.datetime,
            self.venue_name,
            self.address,
            self.seats_sold,
        ]


class EventTextFields(BaseModel):
    """The four descriptive text fields used for keyword extraction."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    venue_name: str = ""
    description: str = ""
    subtitle: str = ""


class SimilarityParams(BaseModel):
    """Tuning knobs for a more-like-this query."""

    model_config = ConfigDict(frozen=True)

    min_term_freq: int = 1
    max_doc_freq: int = 10000
    max_query_terms: int = 25


# Interactive view and flat export deliberately default differently.
INTERACTIVE_SIMILARITY_DEFAULTS = SimilarityParams(min_term_freq=1, max_doc_freq=10000, max_query_terms=25)
EXPORT_SIMILARITY_DEFAULTS = SimilarityParams(min_term_freq=1, max_doc_freq=1, max_query_terms=1)


class HydrationResult(BaseModel):
    """Records returned for one identifier batch plus their sold-count total."""

    model_config = ConfigDict(frozen=True)

    events: list[EventRecord] = Field(default_factory=list)
    total: int = 0


class SearchOutcome(BaseModel):
    """Everything one search request produces, with its query echoed back."""

    model_config = ConfigDict(frozen=True)

    events: list[EventRecord] = Field(default_factory=list)
    total: int = Field(default=0, description="Sum of parsed sold counts on this page.")
    page: int = 1
    keyword: str = ""
    event_id: str = Field(default="", description="Reference event for similarity searches.")
    similarity: SimilarityParams | None = None


class WeightedTerm(BaseModel):
    """A keyphrase and the weight the extraction service gave it."""

    model_config = ConfigDict(frozen=True)

    term: str
    weight: float


class KeywordsResult(BaseModel):
    """Weighted terms extracted for one event."""

    model_config = ConfigDict(frozen=True)

    event_id: str = ""
    terms: list[WeightedTerm] = Field(default_factory=list)
