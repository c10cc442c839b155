"""Plugin loading — Registers every built-in backend, once, in priority order.

Order matters: lookups use the first configured provider, so the hosted
MeiliSearch backend is registered before the store-backed SQLite fallback.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from marksift.adapters.base.registry import PluginManager, get_plugin_manager
from marksift.adapters.sqlite.scoring import ScoringProfile

logger = logging.getLogger(__name__)


def load_all_plugins(
    manager: PluginManager | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    profile: ScoringProfile | None = None,
) -> PluginManager:
    """Register the built-in backends with ``manager``.

    Repeated calls on the same manager are no-ops.

    Args:
        manager: Target registry. Defaults to the process-wide manager.
        session_factory: Store session factory for the SQLite backend.
            Defaults to the one built from settings.
        profile: Scoring profile for the SQLite backend. Defaults to the
            configured one.

    Returns:
        The populated manager.

    Raises:
        ConfigurationError: If a backend's enablement gate is malformed.
    """
    manager = manager or get_plugin_manager()
    if manager.loaded:
        return manager

    from marksift.adapters import meilisearch, sqlite

    # Build every provider first so a bad gate leaves the manager untouched.
    entries = [
        *meilisearch.plugin_registrations(),
        *sqlite.plugin_registrations(session_factory=session_factory, profile=profile),
    ]
    for entry in entries:
        manager.register(entry)

    manager.log_all_plugins()
    manager.loaded = True
    return manager
