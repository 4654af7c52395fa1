"""Abstract base class for keyphrase-extraction services.

Implementations send a text blob to a natural-language service and return
weighted candidate phrases.  No ordering of the result is guaranteed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.event import WeightedTerm


# Concrete implementation: YahooKeyphraseProvider (src/providers/keyphrase/)
class IKeyphraseProvider(ABC):
    """Contract for services that weight the key phrases of a text."""

    @abstractmethod
    async def extract(self, text: str) -> list[WeightedTerm]:
        """Return weighted phrases for *text*.

        Raises
        ------
        src.utils.errors.ExtractionError
            If the service is unreachable or the response is not a JSON
            object of numeric weights.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this service."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credential it needs."""
