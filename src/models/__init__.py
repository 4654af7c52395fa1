"""eventlens domain models, re-exported from ``src.models.event``."""

from src.models.event import (
    EVENT_COLUMNS,
    EXPORT_SIMILARITY_DEFAULTS,
    INTERACTIVE_SIMILARITY_DEFAULTS,
    EventRecord,
    EventTextFields,
    HydrationResult,
    KeywordsResult,
    SearchOutcome,
    SimilarityParams,
    WeightedTerm,
)

__all__ = [
    "EVENT_COLUMNS",
    "EXPORT_SIMILARITY_DEFAULTS",
    "INTERACTIVE_SIMILARITY_DEFAULTS",
    "EventRecord",
    "EventTextFields",
    "HydrationResult",
    "KeywordsResult",
    "SearchOutcome",
    "SimilarityParams",
    "WeightedTerm",
]
