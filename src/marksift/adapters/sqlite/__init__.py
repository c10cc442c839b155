"""SQLite search backend — Live substring search over the bookmark store."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from marksift.adapters.base.registry import PluginRegistration, PluginType
from marksift.adapters.sqlite.client import SQLiteIndexClient
from marksift.adapters.sqlite.provider import SQLiteSearchProvider
from marksift.adapters.sqlite.scoring import ScoringProfile

__all__ = ["ScoringProfile", "SQLiteIndexClient", "SQLiteSearchProvider", "plugin_registrations"]


def plugin_registrations(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    profile: ScoringProfile | None = None,
) -> list[PluginRegistration]:
    """Registrations contributed by the SQLite backend.

    Raises:
        ConfigurationError: If ``USE_SQLITE_SEARCH`` has an invalid value.
    """
    return [
        PluginRegistration(
            type=PluginType.SEARCH,
            name="SQLite",
            provider=SQLiteSearchProvider(session_factory=session_factory, profile=profile),
        )
    ]
