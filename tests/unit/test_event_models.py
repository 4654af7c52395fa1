"""Unit tests for event models and the CSV export formatter."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tests.conftest import make_record
from src.models.event import (
    EVENT_COLUMNS,
    EXPORT_SIMILARITY_DEFAULTS,
    INTERACTIVE_SIMILARITY_DEFAULTS,
    EventRecord,
    SearchOutcome,
)
from src.services.export_formatter import export_filename, render_csv


class TestEventRecord:
    def test_from_row(self) -> None:
        row = ("7", "Name", None, 3, "Owner", "2024-01-01", "Venue", "Addr", 25, "100")
        record = EventRecord.from_row(row)

        assert record.event_id == "7"
        assert record.subtitle == ""
        assert record.user_id == "3"
        assert record.seats_sold == "25"

    def test_from_row_too_short(self) -> None:
        with pytest.raises(ValueError):
            EventRecord.from_row(("1", "only two"))

    def test_frozen(self) -> None:
        record = make_record("1")
        with pytest.raises(ValidationError):
            record.name = "changed"  # type: ignore[misc]

    def test_export_row_drops_capacity(self) -> None:
        row = tuple(f"v{i}" for i in range(len(EVENT_COLUMNS)))
        assert EventRecord.from_row(row).to_export_row() == [f"v{i}" for i in range(9)]


def test_similarity_defaults_differ_per_path() -> None:
    assert (
        INTERACTIVE_SIMILARITY_DEFAULTS.min_term_freq,
        INTERACTIVE_SIMILARITY_DEFAULTS.max_doc_freq,
        INTERACTIVE_SIMILARITY_DEFAULTS.max_query_terms,
    ) == (1, 10000, 25)
    assert (
        EXPORT_SIMILARITY_DEFAULTS.min_term_freq,
        EXPORT_SIMILARITY_DEFAULTS.max_doc_freq,
        EXPORT_SIMILARITY_DEFAULTS.max_query_terms,
    ) == (1, 1, 1)


class TestExport:
    def test_filename_is_escaped(self) -> None:
        assert export_filename("jazz & blues", 2) == "jazz+%26+blues_2.csv"

    def test_render_quotes_fields(self) -> None:
        outcome = SearchOutcome(
            events=[
                make_record("1", "30", address="1 Main St, Springfield"),
                make_record("2", "12", name='Say "hi"'),
            ],
        )
        lines = render_csv(outcome).splitlines()

        assert lines[0] == '1,Event 1,,,,,,"1 Main St, Springfield",30'
        assert lines[1] == '2,"Say ""hi""",,,,,,,12'

    def test_render_empty(self) -> None:
        assert render_csv(SearchOutcome()) == ""
