"""Integration tests for FastAPI API endpoints using TestClient."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.conftest import make_record, make_settings
from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from src.api.routes import router as api_router
from src.main import create_app
from src.models.event import KeywordsResult, SearchOutcome, SimilarityParams, WeightedTerm
from src.services.keyword_extractor import KeywordExtractor
from src.services.search_service import SearchService
from src.utils.errors import ExtractionError, HydrationError, ResolutionError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _create_test_app() -> tuple[FastAPI, MagicMock, MagicMock]:
    """Create a FastAPI app with mocked services on ``app.state``."""
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)

    search_service = MagicMock(spec=SearchService)
    search_service.search_by_keyword = AsyncMock(return_value=SearchOutcome())
    search_service.search_similar = AsyncMock(return_value=SearchOutcome())
    extractor = MagicMock(spec=KeywordExtractor)
    extractor.extract_keywords = AsyncMock(return_value=KeywordsResult())

    app.state.settings = make_settings()
    app.state.search_service = search_service
    app.state.keyword_extractor = extractor
    return app, search_service, extractor


@pytest.fixture
def api() -> tuple[TestClient, MagicMock, MagicMock]:
    app, search_service, extractor = _create_test_app()
    return TestClient(app), search_service, extractor


# ---------------------------------------------------------------------------
# Keyword search
# ---------------------------------------------------------------------------


class TestKeywordSearch:
    def test_json_results(self, api) -> None:
        client, search_service, _ = api
        search_service.search_by_keyword.return_value = SearchOutcome(
            events=[make_record("1", "30"), make_record("2", "12")],
            total=42,
            page=1,
            keyword="jazz",
        )

        response = client.get("/search/keyword", params={"q": "jazz"})

        assert response.status_code == 200
        body = response.json()
        assert [e["event_id"] for e in body["events"]] == ["1", "2"]
        assert body["total"] == 42
        assert body["keyword"] == "jazz"
        assert body["mtf"] is None
        search_service.search_by_keyword.assert_awaited_once_with("jazz", 1)

    def test_first_value_wins(self, api) -> None:
        client, search_service, _ = api
        client.get("/search/keyword?q=jazz&q=blues&p=3&p=9")
        search_service.search_by_keyword.assert_awaited_once_with("jazz", 3)

    @pytest.mark.parametrize("raw_page", ["abc", "", "1.5", "1_000"])
    def test_unparsable_page_defaults_to_one(self, api, raw_page: str) -> None:
        client, search_service, _ = api
        response = client.get("/search/keyword", params={"q": "jazz", "p": raw_page})

        assert response.status_code == 200
        search_service.search_by_keyword.assert_awaited_once_with("jazz", 1)

    def test_missing_query_renders_empty_page(self, api) -> None:
        client, search_service, _ = api
        search_service.search_by_keyword.return_value = SearchOutcome(page=1)

        response = client.get("/search/keyword")

        assert response.status_code == 200
        assert response.json()["events"] == []
        search_service.search_by_keyword.assert_awaited_once_with(None, 1)

    def test_csv_export(self, api) -> None:
        client, search_service, _ = api
        search_service.search_by_keyword.return_value = SearchOutcome(
            events=[make_record("1", "30"), make_record("2", "12")],
            total=42,
            page=2,
            keyword="jazz club",
        )

        response = client.get("/search/keyword?q=jazz+club&p=2&csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == "attachment; filename=jazz+club_2.csv"
        )
        assert response.text == "1,Event 1,,,,,,,30\n2,Event 2,,,,,,,12\n"

    def test_csv_without_query_redirects(self, api) -> None:
        client, search_service, _ = api

        response = client.get("/search/keyword?csv", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/search/keyword"
        search_service.search_by_keyword.assert_not_called()


# ---------------------------------------------------------------------------
# Similarity search
# ---------------------------------------------------------------------------


class TestSimilarSearch:
    def test_interactive_defaults(self, api) -> None:
        client, search_service, _ = api
        params = SimilarityParams(min_term_freq=1, max_doc_freq=10000, max_query_terms=25)
        search_service.search_similar.return_value = SearchOutcome(
            events=[make_record("5", "3")], total=3, event_id="1", similarity=params,
        )

        response = client.get("/search/similar", params={"q": "1"})

        assert response.status_code == 200
        body = response.json()
        assert (body["mtf"], body["xdf"], body["xqt"]) == (1, 10000, 25)
        search_service.search_similar.assert_awaited_once_with("1", 1, params)

    def test_export_defaults(self, api) -> None:
        client, search_service, _ = api

        response = client.get("/search/similar?q=1&csv")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == "attachment; filename=1_1.csv"
        search_service.search_similar.assert_awaited_once_with(
            "1", 1, SimilarityParams(min_term_freq=1, max_doc_freq=1, max_query_terms=1)
        )

    def test_explicit_tuning_overrides_defaults(self, api) -> None:
        client, search_service, _ = api

        client.get("/search/similar", params={"q": "1", "mtf": "2", "xdf": "oops", "xqt": "7"})

        search_service.search_similar.assert_awaited_once_with(
            "1", 1, SimilarityParams(min_term_freq=2, max_doc_freq=10000, max_query_terms=7)
        )

    def test_csv_without_query_redirects(self, api) -> None:
        client, _, _ = api
        response = client.get("/search/similar?csv=1", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/search/similar"


# ---------------------------------------------------------------------------
# Keyword extraction
# ---------------------------------------------------------------------------


class TestKeywords:
    def test_weighted_terms(self, api) -> None:
        client, _, extractor = api
        extractor.extract_keywords.return_value = KeywordsResult(
            event_id="1",
            terms=[WeightedTerm(term="jazz", weight=100), WeightedTerm(term="club", weight=42)],
        )

        response = client.get("/keywords", params={"eid": "1"})

        assert response.status_code == 200
        assert response.json() == {
            "eid": "1",
            "words": [{"term": "jazz", "weight": 100.0}, {"term": "club", "weight": 42.0}],
        }

    def test_unknown_event_is_empty(self, api) -> None:
        client, _, extractor = api
        extractor.extract_keywords.return_value = KeywordsResult(event_id="999")

        response = client.get("/keywords", params={"eid": "999"})

        assert response.status_code == 200
        assert response.json()["words"] == []

    def test_missing_eid_skips_extraction(self, api) -> None:
        client, _, extractor = api
        response = client.get("/keywords")
        assert response.status_code == 200
        extractor.extract_keywords.assert_not_called()


# ---------------------------------------------------------------------------
# Error mapping and plumbing
# ---------------------------------------------------------------------------


class TestErrors:
    def test_resolution_error_is_bad_gateway(self, api) -> None:
        client, search_service, _ = api
        search_service.search_by_keyword.side_effect = ResolutionError(
            "Search request failed", provider_name="elasticsearch"
        )

        response = client.get("/search/keyword", params={"q": "jazz"})

        assert response.status_code == 502
        assert response.json() == {"error": "ResolutionError", "detail": "Search request failed"}

    def test_hydration_error_is_server_error(self, api) -> None:
        client, search_service, _ = api
        search_service.search_similar.side_effect = HydrationError("Store query failed")

        response = client.get("/search/similar", params={"q": "1"})

        assert response.status_code == 500
        assert response.json()["error"] == "HydrationError"

    def test_export_errors_are_json(self, api) -> None:
        client, search_service, _ = api
        search_service.search_by_keyword.side_effect = HydrationError("Store query failed")

        response = client.get("/search/keyword?q=jazz&csv")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")

    def test_extraction_error_is_bad_gateway(self, api) -> None:
        client, _, extractor = api
        extractor.extract_keywords.side_effect = ExtractionError("Keyphrase request failed")

        response = client.get("/keywords", params={"eid": "1"})

        assert response.status_code == 502

    def test_request_id_echoed(self, api) -> None:
        client, _, _ = api
        response = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"


class TestApplicationFactory:
    def test_health(self) -> None:
        client = TestClient(create_app(make_settings()))

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["collaborators"]["search_keyword"] == "http://search.test/event2/_search"

    def test_health_hides_store_path(self) -> None:
        settings = make_settings(store_dsn="/srv/private/data/events.db")
        client = TestClient(create_app(settings))

        collaborators = client.get("/health").json()["collaborators"]

        assert collaborators["store"] == "events.db"
        assert "/srv/private" not in str(collaborators)

    def test_services_missing_before_startup(self) -> None:
        client = TestClient(create_app(make_settings()))
        response = client.get("/search/keyword", params={"q": "jazz"})
        assert response.status_code == 503
