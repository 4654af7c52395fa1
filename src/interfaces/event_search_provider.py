"""Abstract base class for full-text event search backends.

Defines the contract the identifier resolver uses to turn a query into an
ordered list of event identifiers.  Implementations may wrap
Elasticsearch, OpenSearch, or any backend that exposes a keyword query and
a "more like this" query.  Offsets are already computed by the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.event import SimilarityParams


# Concrete implementation: ElasticsearchProvider (src/providers/search/)
class IEventSearchProvider(ABC):
    """Contract for search backends that resolve queries to event ids."""

    @abstractmethod
    async def search_keyword(self, keyword: str, offset: int) -> list[str]:
        """Run a free-text query and return matching ids in rank order.

        Parameters
        ----------
        keyword:
            Raw (unescaped) query text.
        offset:
            0-based index of the first hit to return.

        Returns
        -------
        list[str]
            Zero or more identifiers.  A response whose shape does not match
            the configured keys yields ``[]``.

        Raises
        ------
        src.utils.errors.ResolutionError
            On transport errors, non-2xx status, or an undecodable body.
        """

    @abstractmethod
    async def search_similar(
        self,
        event_id: str,
        offset: int,
        params: SimilarityParams,
    ) -> list[str]:
        """Return ids of events similar to *event_id* in rank order.

        Same result and error contract as :meth:`search_keyword`.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this backend."""
