"""Search-backend provider implementations.

Currently only Elasticsearch.  Any backend that can answer a keyword query
and a more-like-this query can implement IEventSearchProvider; the
identifier resolver uses it transparently via dependency injection.
"""

from src.providers.search.elasticsearch_provider import ElasticsearchProvider
from src.providers.search.response_decoder import extract_identifiers

__all__ = ["ElasticsearchProvider", "extract_identifiers"]
