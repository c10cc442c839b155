"""Base plugin interfaces — Abstract classes for search backends."""

from marksift.adapters.base.client import SearchIndexClient
from marksift.adapters.base.provider import PluginProvider
from marksift.adapters.base.registry import PluginManager, PluginRegistration, PluginType

__all__ = ["PluginManager", "PluginProvider", "PluginRegistration", "PluginType", "SearchIndexClient"]
