"""Flat tabular export of search outcomes.

Produces the CSV body and the attachment filename for the export path.
Columns: event id, name, subtitle, owner id, owner name, date/time,
venue, address, sold count.  No header row is written.
"""

from __future__ import annotations

import csv
import io
from urllib.parse import quote_plus

from src.models.event import SearchOutcome


def export_filename(query_value: str, page: int) -> str:
    """Return ``<url-escaped query>_<page>.csv``."""
    return f"{quote_plus(query_value)}_{page}.csv"


def render_csv(outcome: SearchOutcome) -> str:
    """Render every record in *outcome* as one CSV line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for event in outcome.events:
        writer.writerow(event.to_export_row())
    return buffer.getvalue()
