"""Plugin provider for the SQLite search backend."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from marksift.adapters.base.provider import PluginProvider
from marksift.adapters.sqlite.client import SQLiteIndexClient
from marksift.adapters.sqlite.env import SQLiteSearchEnv, get_env_config
from marksift.adapters.sqlite.scoring import ScoringProfile


class SQLiteSearchProvider(PluginProvider[SQLiteIndexClient]):
    """Enabled by ``USE_SQLITE_SEARCH=true``.

    Args:
        session_factory: Store session factory. Defaults to the process-wide
            one built from settings, resolved when the client is created.
        profile: Scoring profile. Defaults to the configured one.
        env: Gate configuration. Defaults to the environment, read once.

    Raises:
        ConfigurationError: If ``USE_SQLITE_SEARCH`` has an invalid value.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        profile: ScoringProfile | None = None,
        env: SQLiteSearchEnv | None = None,
    ) -> None:
        super().__init__()
        self._env = env or get_env_config()
        self._session_factory = session_factory
        self._profile = profile

    def is_configured(self) -> bool:
        return self._env.USE_SQLITE_SEARCH

    def _create_client(self) -> SQLiteIndexClient:
        session_factory = self._session_factory
        if session_factory is None:
            from marksift.store.database import get_session_factory

            session_factory = get_session_factory()
        profile = self._profile
        if profile is None:
            from marksift.config.settings import get_settings

            profile = ScoringProfile(**get_settings().search.scoring.model_dump())
        return SQLiteIndexClient(session_factory, profile=profile)
