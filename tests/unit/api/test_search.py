"""Tests for the search and index endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from marksift.adapters.base.exceptions import ConnectionError, QueryError, StoreUnavailableError
from marksift.adapters.base.registry import PluginManager, PluginRegistration, PluginType
from marksift.adapters.sqlite.env import SQLiteSearchEnv
from marksift.adapters.sqlite.provider import SQLiteSearchProvider
from marksift.api.app import create_app
from marksift.api.deps import set_engine
from marksift.config.settings import Settings
from marksift.core.engine import SearchEngine
from marksift.models.response import SearchHit, SearchResponse
from marksift.store.database import create_session_factory
from tests.conftest import FakeProvider

# ── Fixtures ─────────────────────────────────────────────────────────────────


def _engine(settings: Settings, *providers: FakeProvider) -> SearchEngine:
    manager = PluginManager()
    for i, provider in enumerate(providers):
        manager.register(PluginRegistration(type=PluginType.SEARCH, name=f"P{i}", provider=provider))
    return SearchEngine(settings, plugin_manager=manager)


@pytest.fixture
def engine(settings: Settings) -> SearchEngine:
    return _engine(settings, FakeProvider(True, label="fake"))


@pytest.fixture
def client(settings: Settings, engine: SearchEngine) -> TestClient:
    app = create_app(settings, engine=engine)
    set_engine(engine)
    yield TestClient(app)
    set_engine(None)


# ── Search ───────────────────────────────────────────────────────────────────


class TestSearchEndpoint:
    def test_search(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"query": "rust", "filter": ["userId = 'u1'"]})

        assert response.status_code == 200
        data = response.json()
        assert data["hits"] == [{"id": "fake-1", "score": 1.0}]
        assert data["total_hits"] == 1

    def test_typed_filter_and_default_limit(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(engine, "search", new_callable=AsyncMock) as mock_search:
            mock_search.return_value = SearchResponse(hits=[SearchHit(id="b1", score=0.9)], total_hits=3)
            response = client.post(
                "/v1/search",
                json={"query": "rust", "filter": [{"field": "userId", "value": "u1"}]},
            )

        assert response.status_code == 200
        options = mock_search.call_args.args[0]
        assert options.filter[0].value == "u1"
        assert options.limit == 20
        assert response.json()["total_hits"] == 3

    def test_explicit_zero_limit_is_kept(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(engine, "search", new_callable=AsyncMock) as mock_search:
            mock_search.return_value = SearchResponse.empty()
            client.post("/v1/search", json={"query": "rust", "filter": ["userId = 'u1'"], "limit": 0})

        assert mock_search.call_args.args[0].limit == 0

    def test_negative_offset_rejected(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"query": "rust", "offset": -1})
        assert response.status_code == 422

    def test_no_backend_is_503(self, settings: Settings) -> None:
        engine = _engine(settings, FakeProvider(False))
        set_engine(engine)
        try:
            response = TestClient(create_app(settings, engine=engine)).post(
                "/v1/search", json={"query": "rust", "filter": ["userId = 'u1'"]}
            )
        finally:
            set_engine(None)

        assert response.status_code == 503
        assert "No search backend" in response.json()["detail"]

    def test_unreachable_backend_is_503(self, settings: Settings) -> None:
        engine = _engine(settings, FakeProvider(True, fail_on_init=ConnectionError("meili down")))
        set_engine(engine)
        try:
            client = TestClient(create_app(settings, engine=engine))
            search_response = client.post("/v1/search", json={"query": "rust", "filter": ["userId = 'u1'"]})
            remove_response = client.delete("/v1/index/b1")
        finally:
            set_engine(None)

        assert search_response.status_code == 503
        assert "meili down" in search_response.json()["detail"]
        assert remove_response.status_code == 503

    def test_store_unavailable_is_503(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(engine, "search", new_callable=AsyncMock, side_effect=StoreUnavailableError("down")):
            response = client.post("/v1/search", json={"query": "rust", "filter": ["userId = 'u1'"]})

        assert response.status_code == 503

    def test_backend_failure_is_500(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(engine, "search", new_callable=AsyncMock, side_effect=QueryError("bad")):
            response = client.post("/v1/search", json={"query": "rust", "filter": ["userId = 'u1'"]})

        assert response.status_code == 500
        assert "bad" in response.json()["detail"]


# ── Index ────────────────────────────────────────────────────────────────────


class TestIndexEndpoints:
    def test_index(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(engine, "index_bookmarks", new_callable=AsyncMock, return_value=2) as mock_index:
            response = client.post("/v1/index", json={"bookmark_ids": ["b1", "b2"]})

        assert response.status_code == 200
        assert response.json() == {"indexed": 2, "deleted": 0}
        mock_index.assert_awaited_once_with(["b1", "b2"])

    def test_index_requires_ids(self, client: TestClient) -> None:
        response = client.post("/v1/index", json={"bookmark_ids": []})
        assert response.status_code == 422

    def test_index_store_unavailable(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(
            engine, "index_bookmarks", new_callable=AsyncMock, side_effect=StoreUnavailableError("down")
        ):
            response = client.post("/v1/index", json={"bookmark_ids": ["b1"]})

        assert response.status_code == 503

    def test_remove(self, client: TestClient, engine: SearchEngine) -> None:
        response = client.delete("/v1/index/b1")

        assert response.status_code == 200
        assert response.json() == {"indexed": 0, "deleted": 1}
        assert engine.plugin_manager.get_provider(PluginType.SEARCH).has_client


# ── Fallback backend ─────────────────────────────────────────────────────────


class TestFallbackSearch:
    def test_unscoped_search_is_empty(self, settings: Settings) -> None:
        provider = SQLiteSearchProvider(
            session_factory=create_session_factory("sqlite+aiosqlite://"),
            env=SQLiteSearchEnv(USE_SQLITE_SEARCH="true"),
        )
        manager = PluginManager()
        manager.register(PluginRegistration(type=PluginType.SEARCH, name="SQLite", provider=provider))
        engine = SearchEngine(settings, plugin_manager=manager)
        set_engine(engine)
        try:
            response = TestClient(create_app(settings, engine=engine)).post(
                "/v1/search", json={"query": "rust", "filter": ["category = 'x'"]}
            )
        finally:
            set_engine(None)

        assert response.status_code == 200
        data = response.json()
        assert data["hits"] == []
        assert data["total_hits"] == 0
