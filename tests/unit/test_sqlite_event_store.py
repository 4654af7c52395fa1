"""Unit tests for SQLiteEventStore against a temporary database."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import make_settings
from src.config.settings import Settings
from src.providers.store.sqlite_event_store import SQLiteEventStore, build_in_clause
from src.utils.errors import HydrationError


@pytest.fixture
def store(db_settings: Settings) -> SQLiteEventStore:
    return SQLiteEventStore(settings=db_settings)


def test_build_in_clause() -> None:
    assert build_in_clause(1) == "?"
    assert build_in_clause(3) == "?,?,?"
    with pytest.raises(ValueError):
        build_in_clause(0)


class TestFetchEvents:
    async def test_batch_lookup(self, store: SQLiteEventStore) -> None:
        records = await store.fetch_events(["2", "1"])

        # Store order (ORDER BY e.id), not request order.
        assert [r.event_id for r in records] == ["1", "2"]
        first = records[0]
        assert first.name == "Late Night Jazz"
        assert first.user_name == "Blue Note Promotions"
        assert first.venue_name == "Blue Note"
        assert first.seats_sold == "30"
        assert first.seats_max == "100"

    async def test_nulls_become_empty(self, store: SQLiteEventStore) -> None:
        (record,) = await store.fetch_events(["2"])
        assert record.subtitle == ""

    async def test_unknown_ids_absent(self, store: SQLiteEventStore) -> None:
        records = await store.fetch_events(["1", "999"])
        assert [r.event_id for r in records] == ["1"]

    async def test_many_placeholders(self, store: SQLiteEventStore) -> None:
        ids = [str(i) for i in range(1, 60)]
        records = await store.fetch_events(ids)
        assert len(records) == 4

    async def test_empty_input(self, store: SQLiteEventStore) -> None:
        assert await store.fetch_events([]) == []

    async def test_bad_sql_raises(self, event_db: Path) -> None:
        store = SQLiteEventStore(
            settings=make_settings(
                store_dsn=str(event_db),
                hydrate_sql="SELECT * FROM no_such_table WHERE id IN ({placeholders})",
            )
        )
        with pytest.raises(HydrationError):
            await store.fetch_events(["1"])

    async def test_too_few_columns_raises(self, event_db: Path) -> None:
        store = SQLiteEventStore(
            settings=make_settings(
                store_dsn=str(event_db),
                hydrate_sql="SELECT id, name FROM events WHERE id IN ({placeholders})",
            )
        )
        with pytest.raises(HydrationError):
            await store.fetch_events(["1"])


class TestFetchTextFields:
    async def test_row_found(self, store: SQLiteEventStore) -> None:
        fields = await store.fetch_text_fields("1")
        assert fields is not None
        assert fields.name == "Late Night Jazz"
        assert fields.venue_name == "Blue Note"
        assert fields.description == "<p>Smoky <b>jazz</b> club</p>"
        assert fields.subtitle == "Trio set"

    async def test_null_fields(self, store: SQLiteEventStore) -> None:
        fields = await store.fetch_text_fields("4")
        assert fields is not None
        assert fields.venue_name == ""
        assert fields.description == ""

    async def test_missing_row_is_none(self, store: SQLiteEventStore) -> None:
        assert await store.fetch_text_fields("999") is None

    async def test_query_failure_raises(self, event_db: Path) -> None:
        store = SQLiteEventStore(
            settings=make_settings(store_dsn=str(event_db), text_fields_sql="SELECT nope FROM x WHERE id = ?")
        )
        with pytest.raises(HydrationError):
            await store.fetch_text_fields("1")
