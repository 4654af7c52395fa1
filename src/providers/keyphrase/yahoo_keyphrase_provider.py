"""Yahoo! JAPAN keyphrase provider implementing IKeyphraseProvider.

Posts the text blob form-encoded (``appid``, ``output=json``,
``sentence``) and receives a JSON object whose keys are phrases and whose
values are their weights.
"""

from __future__ import annotations

import json

import httpx

from src.config.settings import Settings
from src.interfaces.keyphrase_provider import IKeyphraseProvider
from src.models.event import WeightedTerm
from src.utils.errors import ExtractionError
from src.utils.logging import get_logger

_PROVIDER_NAME = "yahoo_keyphrase"


class YahooKeyphraseProvider(IKeyphraseProvider):
    """Keyphrase extraction through the Yahoo! JAPAN text-analysis API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    settings:
        Supplies the application id, endpoint and timeout.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._app_id = settings.nlp_app_id
        self._endpoint = settings.nlp_endpoint
        self._timeout = settings.http_timeout
        self._logger = get_logger(__name__)

    async def extract(self, text: str) -> list[WeightedTerm]:
        form = {"appid": self._app_id, "output": "json", "sentence": text}
        try:
            response = await self._http.post(
                self._endpoint,
                data=form,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._logger.warning("keyphrase_extraction_failed", error=str(exc))
            raise ExtractionError(
                f"Keyphrase request failed: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise ExtractionError(
                "Keyphrase service returned a body that is not JSON",
                provider_name=_PROVIDER_NAME,
            ) from exc

        return self._parse(payload)

    @staticmethod
    def _parse(payload: object) -> list[WeightedTerm]:
        """Convert ``{phrase: weight}`` into terms; anything else is an error."""
        if not isinstance(payload, dict):
            raise ExtractionError(
                "Keyphrase response is not a JSON object", provider_name=_PROVIDER_NAME
            )

        terms: list[WeightedTerm] = []
        for phrase, weight in payload.items():
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                raise ExtractionError(
                    f"Non-numeric weight for phrase {phrase!r}",
                    provider_name=_PROVIDER_NAME,
                )
            terms.append(WeightedTerm(term=phrase, weight=float(weight)))
        return terms

    def get_provider_name(self) -> str:
        """Return ``'yahoo_keyphrase'``."""
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        """Available whenever an application id is configured."""
        return bool(self._app_id)
