"""Plugin provider — Configuration gate and lazy construction for one backend."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from marksift.adapters.base.client import SearchIndexClient

logger = logging.getLogger(__name__)

ClientT = TypeVar("ClientT", bound=SearchIndexClient)


class PluginProvider(ABC, Generic[ClientT]):
    """Hands out at most one client for a backend, and only if it is configured.

    Subclasses capture their configuration when built and implement
    ``is_configured()`` and ``_create_client()``. ``get_client()`` returns
    ``None`` when the backend is not configured; when it is configured but
    the client cannot be built or initialized, the error propagates so that
    callers can tell "not installed" from "installed but broken".
    """

    def __init__(self) -> None:
        self._client: ClientT | None = None
        self._lock = asyncio.Lock()

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether this backend is enabled. Must not construct a client."""

    @abstractmethod
    def _create_client(self) -> ClientT:
        """Build a fresh, uninitialized client."""

    async def get_client(self) -> ClientT | None:
        if not self.is_configured():
            return None
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                client = self._create_client()
                try:
                    await client.initialize()
                except Exception:
                    await client.shutdown()
                    raise
                self._client = client
                logger.info("Initialized search client: %s", client.name)
        return self._client

    @property
    def has_client(self) -> bool:
        """Whether a client has been constructed."""
        return self._client is not None

    async def shutdown(self) -> None:
        """Shut down the constructed client, if any."""
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.shutdown()
        logger.info("Shut down search client: %s", client.name)
