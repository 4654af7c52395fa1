"""Lenient decoding of search-backend hit lists.

Backends answer with loosely typed JSON.  Rather than scattering type
checks through the providers, this module walks
``payload[outer_key][inner_key][*][value_key]`` once and collapses every
shape mismatch at the container level to ``None`` ("no results").

Individual rows that lack a usable identifier are skipped; the remaining
rows keep their order.
"""

from __future__ import annotations

from typing import Any


def extract_identifiers(
    payload: Any,
    outer_key: str,
    inner_key: str,
    value_key: str,
) -> list[str] | None:
    """Pull the identifier list out of a decoded search response.

    Returns
    -------
    list[str] | None
        Identifiers in response order, or ``None`` if the payload does not
        have the expected outer/inner structure.
    """
    if not isinstance(payload, dict):
        return None
    outer = payload.get(outer_key)
    if not isinstance(outer, dict):
        return None
    rows = outer.get(inner_key)
    if not isinstance(rows, list):
        return None

    identifiers: list[str] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        value = row.get(value_key)
        # bool is an int subclass; it is never a valid id.
        if isinstance(value, bool):
            continue
        if isinstance(value, str) and value:
            identifiers.append(value)
        elif isinstance(value, int):
            identifiers.append(str(value))
    return identifiers
