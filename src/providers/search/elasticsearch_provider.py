"""Elasticsearch search provider implementing IEventSearchProvider.

Keyword queries are GET requests against a URL template that receives the
hit offset and the URL-escaped keyword.  Similarity queries POST a
``more_like_this`` body seeded with an existing event's ``name`` and
``description`` fields.  Both responses are decoded by
:func:`~src.providers.search.response_decoder.extract_identifiers`.

Transport failures, non-2xx statuses and undecodable bodies raise
:class:`~src.utils.errors.ResolutionError`; a well-formed response that
does not have the expected shape resolves to no identifiers.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote_plus

import httpx

from src.config.settings import Settings
from src.interfaces.event_search_provider import IEventSearchProvider
from src.models.event import SimilarityParams
from src.providers.search.response_decoder import extract_identifiers
from src.utils.errors import ResolutionError
from src.utils.logging import get_logger

_PROVIDER_NAME = "elasticsearch"
_SIMILAR_FIELDS = ["name", "description"]
_SIMILAR_WINDOW = 100  # hits requested per similarity query


class ElasticsearchProvider(IEventSearchProvider):
    """Resolve event ids through an Elasticsearch-compatible backend.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    settings:
        Supplies URL templates, index names, response keys and the timeout.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._keyword_url = settings.search_keyword_url
        self._similar_url = settings.search_similar_url
        self._index = settings.search_index
        self._doc_type = settings.search_doc_type
        self._outer_key = settings.result_outer_key
        self._inner_key = settings.result_inner_key
        self._value_key = settings.result_value_key
        self._timeout = settings.http_timeout
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def search_keyword(self, keyword: str, offset: int) -> list[str]:
        try:
            url = self._keyword_url.format(offset=offset, keyword=quote_plus(keyword))
        except (KeyError, IndexError, ValueError) as exc:
            raise ResolutionError(
                f"Cannot build keyword search URL: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        try:
            response = await self._http.get(url, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._logger.warning("keyword_search_failed", keyword=keyword, error=str(exc))
            raise ResolutionError(
                f"Keyword search failed: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        return self._decode(response, query=keyword)

    async def search_similar(
        self,
        event_id: str,
        offset: int,
        params: SimilarityParams,
    ) -> list[str]:
        body = self.build_similarity_query(event_id, offset, params)
        try:
            response = await self._http.post(
                self._similar_url,
                json=body,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._logger.warning("similar_search_failed", event_id=event_id, error=str(exc))
            raise ResolutionError(
                f"Similarity search failed: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        return self._decode(response, query=event_id)

    def build_similarity_query(
        self,
        event_id: str,
        offset: int,
        params: SimilarityParams,
    ) -> dict[str, Any]:
        """Build the ``{from, size, query}`` body for a similarity search.

        ``from`` and ``size`` are strings; Elasticsearch coerces them.
        """
        more_like_this = {
            "fields": list(_SIMILAR_FIELDS),
            "docs": [
                {"_index": self._index, "_type": self._doc_type, "_id": event_id},
            ],
            "min_term_freq": params.min_term_freq,
            "max_doc_freq": params.max_doc_freq,
            "max_query_terms": params.max_query_terms,
        }
        return {
            "from": str(offset),
            "size": str(_SIMILAR_WINDOW),
            "query": {"more_like_this": more_like_this},
        }

    def get_provider_name(self) -> str:
        """Return ``'elasticsearch'``."""
        return _PROVIDER_NAME

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _decode(self, response: httpx.Response, query: str) -> list[str]:
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            self._logger.warning("search_response_undecodable", query=query)
            raise ResolutionError(
                "Search backend returned a body that is not JSON",
                provider_name=_PROVIDER_NAME,
            ) from exc

        identifiers = extract_identifiers(
            payload, self._outer_key, self._inner_key, self._value_key
        )
        if identifiers is None:
            self._logger.warning(
                "search_response_unexpected_shape",
                query=query,
                outer_key=self._outer_key,
                inner_key=self._inner_key,
            )
            return []

        self._logger.debug("search_complete", query=query, result_count=len(identifiers))
        return identifiers
