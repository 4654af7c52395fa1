"""Pure pagination and aggregation helpers shared by the search flow.

No I/O here: these are called from the resolver and hydrator and are
exercised directly by the property tests.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

# ASCII digits only: "1_000", "\u0663" and "1e3" are not counts.
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def offset_for(page: int, page_size: int) -> int:
    """Convert a 1-based page number into a 0-based result offset.

    Pages below 1 are clamped to 1, so any ``page <= 1`` yields 0.
    """
    return max(page_size * (max(page, 1) - 1), 0)


def effective_page(page: int) -> int:
    """Return the page number actually served for a requested *page*."""
    return max(page, 1)


def parse_decimal(raw: str) -> int | None:
    """Parse a plain decimal integer, or return ``None``.

    Surrounding whitespace is tolerated; anything else must be an optional
    sign followed by ASCII digits.
    """
    text = raw.strip()
    if not _DECIMAL_RE.fullmatch(text):
        return None
    return int(text)


def parse_count(raw: Any) -> int:
    """Parse a numeric-as-text count, returning 0 when it is not an integer.

    ``None``, empty strings, ``"abc"`` and ``"1.5"`` all give 0; surrounding
    whitespace is tolerated.
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    value = parse_decimal(str(raw))
    return 0 if value is None else value


def sum_sold_counts(records: Iterable[Any]) -> int:
    """Sum the ``seats_sold`` field across *records*.

    Accepts model instances or plain mappings.  Never raises: unparsable or
    missing values contribute 0.
    """
    total = 0
    for record in records:
        if isinstance(record, dict):
            raw = record.get("seats_sold")
        else:
            raw = getattr(record, "seats_sold", None)
        total += parse_count(raw)
    return total
