"""Plugin provider for the MeiliSearch backend."""

from __future__ import annotations

from marksift.adapters.base.provider import PluginProvider
from marksift.adapters.meilisearch.client import MeiliSearchIndexClient
from marksift.adapters.meilisearch.env import MeiliSearchEnv, get_env_config


class MeiliSearchProvider(PluginProvider[MeiliSearchIndexClient]):
    """Enabled when ``MEILI_ADDR`` is set."""

    def __init__(self, env: MeiliSearchEnv | None = None) -> None:
        super().__init__()
        self._env = env or get_env_config()

    def is_configured(self) -> bool:
        return bool(self._env.MEILI_ADDR)

    def _create_client(self) -> MeiliSearchIndexClient:
        return MeiliSearchIndexClient(
            base_url=self._env.MEILI_ADDR or "",
            index=self._env.MEILI_INDEX,
            api_key=self._env.MEILI_MASTER_KEY,
            timeout=self._env.MEILI_TIMEOUT,
        )
