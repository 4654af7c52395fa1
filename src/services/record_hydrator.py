"""Record hydration: event ids -> full records plus the sold-count total.

One batched store lookup per call.  By default records keep the store's
return order; with ``restore_rank_order`` they are rearranged to follow
the identifier sequence the resolver produced.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.interfaces.event_store_provider import IEventStore
from src.models.event import EventRecord, HydrationResult
from src.utils.logging import get_logger
from src.utils.pagination import sum_sold_counts


def reorder_by_rank(records: Sequence[EventRecord], event_ids: Sequence[str]) -> list[EventRecord]:
    """Sort *records* into the order of *event_ids*.

    Records whose id is not in *event_ids* go last, in their original order.
    """
    rank = {}
    for position, event_id in enumerate(event_ids):
        rank.setdefault(event_id, position)
    fallback = len(rank)
    return sorted(records, key=lambda record: rank.get(record.event_id, fallback))


class RecordHydrator:
    """Turn identifier batches into :class:`HydrationResult` objects."""

    def __init__(self, store: IEventStore, restore_rank_order: bool = False) -> None:
        self._store = store
        self._restore_rank_order = restore_rank_order
        self._logger = get_logger(__name__)

    async def hydrate(self, event_ids: Sequence[str]) -> HydrationResult:
        """Fetch records for *event_ids* and total their sold counts.

        An empty sequence returns an empty result without touching the
        store.  Store failures propagate as HydrationError.
        """
        if not event_ids:
            return HydrationResult(events=[], total=0)

        events = await self._store.fetch_events(event_ids)
        if self._restore_rank_order:
            events = reorder_by_rank(events, event_ids)

        total = sum_sold_counts(events)
        self._logger.info(
            "hydration_complete",
            requested=len(event_ids),
            returned=len(events),
            total_sold=total,
        )
        return HydrationResult(events=events, total=total)
