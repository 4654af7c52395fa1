"""Public interface definitions for the external collaborators.

The search backend, the relational event store and the keyphrase service
are reached only through the abstract base classes in this package.
Concrete adapters live in ``src/providers/`` and are wired together in
``src/main.py``, so services and tests can swap them freely.

CONCRETE PROVIDER MAP:
    Interface               ->  Concrete implementation (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IEventSearchProvider    ->  ElasticsearchProvider
    IEventStore             ->  SQLiteEventStore
    IKeyphraseProvider      ->  YahooKeyphraseProvider
"""

from src.interfaces.event_search_provider import IEventSearchProvider
from src.interfaces.event_store_provider import IEventStore
from src.interfaces.keyphrase_provider import IKeyphraseProvider

__all__ = [
    "IEventSearchProvider",
    "IEventStore",
    "IKeyphraseProvider",
]
