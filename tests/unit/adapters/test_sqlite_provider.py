"""Tests for the SQLite provider's configuration gate and lazy client construction."""

from __future__ import annotations

import pytest

from marksift.adapters.base.exceptions import ConfigurationError, StoreUnavailableError
from marksift.adapters.sqlite.client import SQLiteIndexClient
from marksift.adapters.sqlite.env import SQLiteSearchEnv, get_env_config
from marksift.adapters.sqlite.provider import SQLiteSearchProvider
from marksift.store.database import create_session_factory


class TestGate:
    def test_defaults_to_disabled(self) -> None:
        assert get_env_config().USE_SQLITE_SEARCH is False

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("false", False)])
    def test_accepts_literals(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
        monkeypatch.setenv("USE_SQLITE_SEARCH", raw)
        assert get_env_config().USE_SQLITE_SEARCH is expected

    @pytest.mark.parametrize("raw", ["TRUE", "True", "1", "yes", "", " true"])
    def test_rejects_anything_else(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("USE_SQLITE_SEARCH", raw)
        with pytest.raises(ConfigurationError, match="USE_SQLITE_SEARCH"):
            get_env_config()

    def test_provider_construction_fails_on_bad_gate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USE_SQLITE_SEARCH", "on")
        with pytest.raises(ConfigurationError):
            SQLiteSearchProvider()

    def test_gate_is_read_once(self, monkeypatch: pytest.MonkeyPatch, session_factory) -> None:
        monkeypatch.setenv("USE_SQLITE_SEARCH", "true")
        first = SQLiteSearchProvider(session_factory=session_factory)
        monkeypatch.setenv("USE_SQLITE_SEARCH", "false")
        second = SQLiteSearchProvider(session_factory=session_factory)

        assert first.is_configured()
        assert second.is_configured()


class TestProvider:
    async def test_not_configured_returns_none(self, session_factory) -> None:
        provider = SQLiteSearchProvider(session_factory=session_factory, env=SQLiteSearchEnv(USE_SQLITE_SEARCH="false"))

        assert not provider.is_configured()
        assert await provider.get_client() is None
        assert not provider.has_client

    async def test_configured_builds_one_client(self, session_factory) -> None:
        provider = SQLiteSearchProvider(session_factory=session_factory, env=SQLiteSearchEnv(USE_SQLITE_SEARCH="true"))
        assert not provider.has_client

        client = await provider.get_client()
        assert isinstance(client, SQLiteIndexClient)
        assert provider.has_client
        assert await provider.get_client() is client

    async def test_configured_but_broken_store_propagates(self) -> None:
        provider = SQLiteSearchProvider(
            session_factory=create_session_factory("sqlite+aiosqlite:////nonexistent/dir/store.db"),
            env=SQLiteSearchEnv(USE_SQLITE_SEARCH="true"),
        )

        with pytest.raises(StoreUnavailableError):
            await provider.get_client()
        assert not provider.has_client

    async def test_shutdown_releases_client(self, session_factory) -> None:
        provider = SQLiteSearchProvider(session_factory=session_factory, env=SQLiteSearchEnv(USE_SQLITE_SEARCH="true"))
        first = await provider.get_client()

        await provider.shutdown()
        assert not provider.has_client
        second = await provider.get_client()
        assert second is not first
