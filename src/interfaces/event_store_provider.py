"""Abstract base class for the relational event store.

The store owns the event rows; eventlens only reads them.  Both lookups
are parameterised: identifiers are never interpolated into SQL text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.models.event import EventRecord, EventTextFields


# Concrete implementation: SQLiteEventStore (src/providers/store/)
class IEventStore(ABC):
    """Contract for read access to stored events.

    All operations are async; each call acquires its own connection and
    releases it before returning, whether or not the call succeeds.
    """

    @abstractmethod
    async def fetch_events(self, event_ids: Sequence[str]) -> list[EventRecord]:
        """Fetch all rows for *event_ids* in one batched round trip.

        Rows come back in the store's natural order, not the order of
        *event_ids*.  Identifiers with no row are simply absent.

        Raises
        ------
        src.utils.errors.HydrationError
            If the query cannot be built or executed.
        """

    @abstractmethod
    async def fetch_text_fields(self, event_id: str) -> EventTextFields | None:
        """Fetch name, venue name, description and subtitle for one event.

        Returns ``None`` when no row exists.  ``NULL`` columns map to empty
        strings.

        Raises
        ------
        src.utils.errors.HydrationError
            If the query fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
