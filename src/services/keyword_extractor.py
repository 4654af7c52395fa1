"""Keyword extraction for a single event.

Flow: fetch the four text fields -> strip markup from the description ->
join ``name subtitle description venue`` -> ask the keyphrase service for
weighted phrases.  An event with no stored row yields an empty result;
store and service failures propagate.
"""

from __future__ import annotations

from src.interfaces.event_store_provider import IEventStore
from src.interfaces.keyphrase_provider import IKeyphraseProvider
from src.models.event import EventTextFields, KeywordsResult
from src.utils.logging import get_logger
from src.utils.text_sanitizer import compose_text_blob, strip_markup


class KeywordExtractor:
    """Derive weighted keyphrases from an event's descriptive text."""

    def __init__(self, store: IEventStore, keyphrase_provider: IKeyphraseProvider) -> None:
        self._store = store
        self._keyphrases = keyphrase_provider
        self._logger = get_logger(__name__)

    async def build_text(self, event_id: str) -> str | None:
        """Return the sanitised text blob for *event_id*, or ``None`` if absent."""
        fields = await self._store.fetch_text_fields(event_id)
        if fields is None:
            return None
        return self._compose(fields)

    async def extract_keywords(self, event_id: str) -> KeywordsResult:
        text = await self.build_text(event_id)
        if text is None:
            return KeywordsResult(event_id=event_id, terms=[])

        terms = await self._keyphrases.extract(text)
        self._logger.info("keywords_extracted", event_id=event_id, term_count=len(terms))
        return KeywordsResult(event_id=event_id, terms=terms)

    @staticmethod
    def _compose(fields: EventTextFields) -> str:
        return compose_text_blob(
            name=fields.name,
            subtitle=fields.subtitle,
            description=strip_markup(fields.description),
            venue_name=fields.venue_name,
        )
