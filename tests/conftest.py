"""Shared pytest fixtures for the eventlens test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiosqlite
import httpx
import pytest
import pytest_asyncio

from src.config.settings import Settings
from src.interfaces.event_search_provider import IEventSearchProvider
from src.interfaces.event_store_provider import IEventStore
from src.interfaces.keyphrase_provider import IKeyphraseProvider
from src.models.event import EventRecord

HYDRATE_SQL = (
    "SELECT e.id, e.name, e.subtitle, u.id, u.name, e.datetime, e.venue_name, "
    "e.address, e.seats_sold, e.seats_max "
    "FROM events e JOIN users u ON u.id = e.user_id "
    "WHERE e.id IN ({placeholders}) ORDER BY e.id"
)
TEXT_FIELDS_SQL = "SELECT name, venue_name, description, subtitle FROM events WHERE id = ?"

_SCHEMA = [
    "CREATE TABLE users (id TEXT PRIMARY KEY, name TEXT)",
    """CREATE TABLE events (
        id          TEXT PRIMARY KEY,
        name        TEXT,
        subtitle    TEXT,
        user_id     TEXT,
        datetime    TEXT,
        venue_name  TEXT,
        address     TEXT,
        seats_sold  TEXT,
        seats_max   TEXT,
        description TEXT
    )""",
]

_USERS = [("u1", "Blue Note Promotions"), ("u2", "Warehouse Collective")]

_EVENTS = [
    ("1", "Late Night Jazz", "Trio set", "u1", "2024-05-01 20:00", "Blue Note",
     "1 Main St", "30", "100", "<p>Smoky <b>jazz</b> club</p>"),
    ("2", "Jazz Brunch", None, "u1", "2024-05-02 11:00", "Cafe Lumen",
     "2 High St", "12", "40", None),
    ("3", "Techno Marathon", "All night long", "u2", "2024-05-03 23:00", "Tresor",
     "Köpenicker Str. 70", "abc", "500", "<script>alert(1)</script>Great venue"),
    ("4", "Open Rehearsal", "", "u2", "2024-05-04 18:00", None,
     "", "", "", None),
]


def make_settings(**overrides: Any) -> Settings:
    """Build a fully populated Settings object for tests."""
    values: dict[str, Any] = {
        "store_dsn": ":memory:",
        "hydrate_sql": HYDRATE_SQL,
        "text_fields_sql": TEXT_FIELDS_SQL,
        "search_keyword_url": "http://search.test/event2/_search?from={offset}&q={keyword}",
        "search_similar_url": "http://search.test/event2/_search",
        "page_size": 20,
        "nlp_app_id": "test-app-id",
        "nlp_endpoint": "http://nlp.test/extract",
        "http_timeout": 5.0,
    }
    values.update(overrides)
    return Settings(**values)


def make_record(event_id: str, seats_sold: str = "0", **fields: str) -> EventRecord:
    return EventRecord(event_id=event_id, name=fields.pop("name", f"Event {event_id}"),
                       seats_sold=seats_sold, **fields)


def make_response(
    payload: Any = None,
    *,
    status_code: int = 200,
    json_error: Exception | None = None,
) -> MagicMock:
    """Build a fake ``httpx.Response`` for an injected AsyncMock client."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    if status_code >= 400:
        request = httpx.Request("GET", "http://fake.test")
        real = httpx.Response(status_code, request=request)
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("error", request=request, response=real)
        )
    else:
        response.raise_for_status = MagicMock(return_value=None)
    if json_error is not None:
        response.json = MagicMock(side_effect=json_error)
    else:
        response.json = MagicMock(return_value=payload)
    return response


def hits_payload(*ids: Any) -> dict[str, Any]:
    """Elasticsearch-shaped response body for the given ids."""
    return {"took": 3, "hits": {"total": len(ids), "hits": [{"_id": i, "_score": 1.0} for i in ids]}}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def event_db(tmp_path: Path) -> Path:
    """A SQLite database seeded with four events and two owners."""
    db_path = tmp_path / "events.db"
    async with aiosqlite.connect(str(db_path)) as db:
        for statement in _SCHEMA:
            await db.execute(statement)
        await db.executemany("INSERT INTO users VALUES (?, ?)", _USERS)
        await db.executemany(
            "INSERT INTO events VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)", _EVENTS
        )
        await db.commit()
    return db_path


@pytest.fixture
def db_settings(event_db: Path) -> Settings:
    return make_settings(store_dsn=str(event_db))


@pytest.fixture
def mock_http_client() -> AsyncMock:
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(return_value=make_response(hits_payload()))
    client.post = AsyncMock(return_value=make_response(hits_payload()))
    return client


@pytest.fixture
def mock_search_provider() -> IEventSearchProvider:
    mock = MagicMock(spec=IEventSearchProvider)
    mock.get_provider_name.return_value = "mock-search"
    mock.search_keyword = AsyncMock(return_value=[])
    mock.search_similar = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def mock_store() -> IEventStore:
    mock = MagicMock(spec=IEventStore)
    mock.get_provider_name.return_value = "mock-store"
    mock.fetch_events = AsyncMock(return_value=[])
    mock.fetch_text_fields = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_keyphrase_provider() -> IKeyphraseProvider:
    mock = MagicMock(spec=IKeyphraseProvider)
    mock.get_provider_name.return_value = "mock-keyphrase"
    mock.is_available.return_value = True
    mock.extract = AsyncMock(return_value=[])
    return mock
