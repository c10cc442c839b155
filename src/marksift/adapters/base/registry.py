"""Plugin Manager — Registration and selection of pluggable backends.

Backends register a provider under a capability type at startup. Lookups
walk the registrations of a type in registration order and use the first
provider that is configured, so the loading order decides priority.
Registrations are append-only for the lifetime of the manager.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from marksift.adapters.base.client import SearchIndexClient
from marksift.adapters.base.provider import PluginProvider

logger = logging.getLogger(__name__)


class PluginType(str, Enum):
    """Capability types a plugin can provide."""

    SEARCH = "search"


class PluginRegistration(BaseModel):
    """One provider registered under a capability type."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    type: PluginType
    name: str
    provider: PluginProvider


class NoSearchBackendError(Exception):
    """Raised when no registered search provider is configured."""


class PluginManager:
    """Registry of capability → provider bindings.

    The registry is an ordinary object so tests can build isolated ones;
    the application uses the process-wide instance from
    ``get_plugin_manager()``.

    Example:
        >>> manager = PluginManager()
        >>> manager.register(PluginRegistration(type=PluginType.SEARCH, name="SQLite", provider=provider))
        >>> client = await manager.get_client(PluginType.SEARCH)
    """

    def __init__(self) -> None:
        self._registrations: list[PluginRegistration] = []
        self.loaded = False

    def register(self, entry: PluginRegistration) -> None:
        """Append a registration. Duplicate types and names are kept."""
        self._registrations.append(entry)
        logger.info("Registered %s plugin: %s", entry.type.value, entry.name)

    def registrations(self, plugin_type: PluginType | None = None) -> list[PluginRegistration]:
        """Registrations in registration order, optionally filtered by type."""
        if plugin_type is None:
            return list(self._registrations)
        return [r for r in self._registrations if r.type == plugin_type]

    def get_provider(self, plugin_type: PluginType) -> PluginProvider | None:
        """First configured provider of ``plugin_type``, or ``None``."""
        for entry in self.registrations(plugin_type):
            if entry.provider.is_configured():
                return entry.provider
        return None

    async def get_client(self, plugin_type: PluginType) -> SearchIndexClient | None:
        """Client of the first configured provider that yields one.

        Unconfigured providers are skipped without building their client.
        Construction errors from a configured provider propagate.
        """
        for entry in self.registrations(plugin_type):
            if not entry.provider.is_configured():
                continue
            client = await entry.provider.get_client()
            if client is not None:
                return client
            logger.warning("Plugin '%s' is configured but returned no client", entry.name)
        return None

    def log_all_plugins(self) -> None:
        """Log every registration with its configuration state."""
        if not self._registrations:
            logger.info("No plugins registered")
            return
        for entry in self._registrations:
            logger.info(
                "Plugin %s/%s: %s",
                entry.type.value,
                entry.name,
                "configured" if entry.provider.is_configured() else "not configured",
            )

    async def shutdown_all(self) -> None:
        """Shut down every client that was constructed."""
        for entry in self._registrations:
            try:
                await entry.provider.shutdown()
            except Exception:
                logger.warning("Error shutting down plugin: %s", entry.name, exc_info=True)

    @property
    def registered_plugins(self) -> list[str]:
        """Names of all registrations, in order."""
        return [r.name for r in self._registrations]


_plugin_manager = PluginManager()


def get_plugin_manager() -> PluginManager:
    """Return the process-wide plugin manager."""
    return _plugin_manager
