"""Search orchestration: resolve -> hydrate -> SearchOutcome.

Resolution and hydration run sequentially because hydration needs the
resolver's output.  An empty query skips both network calls; an empty
identifier list skips hydration.
"""

from __future__ import annotations

from src.models.event import SearchOutcome, SimilarityParams
from src.services.identifier_resolver import IdentifierResolver
from src.services.record_hydrator import RecordHydrator
from src.utils.logging import get_logger
from src.utils.pagination import effective_page


class SearchService:
    """Run keyword and similarity searches end to end."""

    def __init__(self, resolver: IdentifierResolver, hydrator: RecordHydrator) -> None:
        self._resolver = resolver
        self._hydrator = hydrator
        self._logger = get_logger(__name__)

    async def search_by_keyword(self, keyword: str | None, page: int = 1) -> SearchOutcome:
        """Search by free text.  ``None`` or ``""`` returns an empty outcome."""
        served_page = effective_page(page)
        if not keyword:
            return SearchOutcome(page=served_page)

        ids = await self._resolver.resolve_by_keyword(keyword, page)
        hydrated = await self._hydrator.hydrate(ids)
        return SearchOutcome(
            events=hydrated.events,
            total=hydrated.total,
            page=served_page,
            keyword=keyword,
        )

    async def search_similar(
        self,
        event_id: str | None,
        page: int = 1,
        params: SimilarityParams | None = None,
    ) -> SearchOutcome:
        """Search for events similar to *event_id*.

        The tuning parameters are echoed even when no reference id is given.
        """
        served_page = effective_page(page)
        params = params or SimilarityParams()
        if not event_id:
            return SearchOutcome(page=served_page, similarity=params)

        ids = await self._resolver.resolve_by_similarity(event_id, page, params)
        hydrated = await self._hydrator.hydrate(ids)
        return SearchOutcome(
            events=hydrated.events,
            total=hydrated.total,
            page=served_page,
            event_id=event_id,
            similarity=params,
        )
