"""SQLite-backed event store.

Reads event rows with ``aiosqlite``.  Both SQL statements come from
configuration: the hydration template carries a ``{placeholders}`` field
that is expanded to one ``?`` per identifier, so every lookup stays a
single parameterised round trip.

Each call opens its own connection inside ``async with`` and the
connection is closed on success, error or cancellation alike.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import aiosqlite
import structlog

from src.config.settings import Settings
from src.interfaces.event_store_provider import IEventStore
from src.models.event import EventRecord, EventTextFields
from src.utils.errors import HydrationError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "sqlite"


def build_in_clause(count: int) -> str:
    """Return ``?,?,...`` with *count* placeholders."""
    if count < 1:
        msg = f"Placeholder count must be positive, got {count}"
        raise ValueError(msg)
    return ",".join("?" * count)


class SQLiteEventStore(IEventStore):
    """Event store over a SQLite database file."""

    def __init__(self, settings: Settings) -> None:
        self._db_path = Path(settings.store_dsn)
        self._hydrate_sql = settings.hydrate_sql
        self._text_fields_sql = settings.text_fields_sql

    async def fetch_events(self, event_ids: Sequence[str]) -> list[EventRecord]:
        """Fetch every row for *event_ids* with one ``IN (...)`` query."""
        if not event_ids:
            return []

        try:
            sql = self._hydrate_sql.format(placeholders=build_in_clause(len(event_ids)))
        except (KeyError, IndexError, ValueError) as exc:
            raise HydrationError(
                f"Cannot build hydration query: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                cursor = await db.execute(sql, tuple(event_ids))
                rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            logger.error("hydration_query_failed", error=str(exc), id_count=len(event_ids))
            raise HydrationError(
                f"Hydration query failed: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        try:
            records = [EventRecord.from_row(row) for row in rows]
        except ValueError as exc:
            raise HydrationError(
                f"Hydration query returned unexpected columns: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        logger.debug("events_fetched", requested=len(event_ids), returned=len(records))
        return records

    async def fetch_text_fields(self, event_id: str) -> EventTextFields | None:
        """Fetch the four descriptive columns for one event, or ``None``."""
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                cursor = await db.execute(self._text_fields_sql, (event_id,))
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            logger.error("text_fields_query_failed", event_id=event_id, error=str(exc))
            raise HydrationError(
                f"Text field query failed: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        if row is None:
            logger.info("text_fields_not_found", event_id=event_id)
            return None

        name, venue_name, description, subtitle = (
            "" if value is None else str(value) for value in row[:4]
        )
        return EventTextFields(
            name=name,
            venue_name=venue_name,
            description=description,
            subtitle=subtitle,
        )

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
        return "sqlite_event_store"
