"""Utility modules for eventlens.

- **errors** -- Domain exception hierarchy rooted at EventLensError; each
  stage raises its own subclass, which also carries the HTTP status.
- **logging** -- structlog setup: coloured console output in development,
  JSON in production, plus per-request id binding.
- **pagination** -- Page/offset arithmetic and lenient sold-count parsing.
- **text_sanitizer** -- Markup stripping and text-blob assembly for
  keyphrase extraction.
"""

from src.utils.errors import (
    ConfigurationError,
    EventLensError,
    ExtractionError,
    HydrationError,
    ResolutionError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.pagination import effective_page, offset_for, parse_count, sum_sold_counts
from src.utils.text_sanitizer import compose_text_blob, strip_markup

__all__ = [
    "ConfigurationError",
    "EventLensError",
    "ExtractionError",
    "HydrationError",
    "ResolutionError",
    "compose_text_blob",
    "configure_logging",
    "effective_page",
    "get_logger",
    "offset_for",
    "parse_count",
    "strip_markup",
    "sum_sold_counts",
]
