"""MeiliSearch backend — Hosted full-text index, preferred when configured."""

from __future__ import annotations

from marksift.adapters.base.registry import PluginRegistration, PluginType
from marksift.adapters.meilisearch.client import MeiliSearchIndexClient
from marksift.adapters.meilisearch.provider import MeiliSearchProvider

__all__ = ["MeiliSearchIndexClient", "MeiliSearchProvider", "plugin_registrations"]


def plugin_registrations() -> list[PluginRegistration]:
    """Registrations contributed by the MeiliSearch backend."""
    return [
        PluginRegistration(
            type=PluginType.SEARCH,
            name="MeiliSearch",
            provider=MeiliSearchProvider(),
        )
    ]
