"""Relational event-store provider implementations."""

from src.providers.store.sqlite_event_store import SQLiteEventStore

__all__ = ["SQLiteEventStore"]
