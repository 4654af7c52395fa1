"""Identifier resolution: query -> ordered event ids for one page.

Pages are 1-based at this interface; the resolver converts them into the
0-based hit offset the search backend expects and delegates the network
call to an :class:`~src.interfaces.event_search_provider.IEventSearchProvider`.
"""

from __future__ import annotations

from src.interfaces.event_search_provider import IEventSearchProvider
from src.models.event import SimilarityParams
from src.utils.logging import get_logger
from src.utils.pagination import offset_for


class IdentifierResolver:
    """Resolve keyword and similarity queries to event identifiers."""

    def __init__(self, search_provider: IEventSearchProvider, page_size: int) -> None:
        self._search = search_provider
        self._page_size = page_size
        self._logger = get_logger(__name__)

    async def resolve_by_keyword(self, keyword: str, page: int) -> list[str]:
        """Return ids matching *keyword* on *page*.

        Raises ResolutionError if the backend call fails.
        """
        offset = offset_for(page, self._page_size)
        ids = await self._search.search_keyword(keyword, offset)
        self._logger.info("keyword_resolved", keyword=keyword, page=page, offset=offset, hits=len(ids))
        return ids

    async def resolve_by_similarity(
        self,
        event_id: str,
        page: int,
        params: SimilarityParams,
    ) -> list[str]:
        """Return ids of events similar to *event_id* on *page*."""
        offset = offset_for(page, self._page_size)
        ids = await self._search.search_similar(event_id, offset, params)
        self._logger.info(
            "similarity_resolved",
            event_id=event_id,
            page=page,
            offset=offset,
            min_term_freq=params.min_term_freq,
            max_doc_freq=params.max_doc_freq,
            max_query_terms=params.max_query_terms,
            hits=len(ids),
        )
        return ids
