"""MarkSift Engine — Application-facing entry point to bookmark search.

Callers never talk to a backend directly. The engine:
  1. Loads the built-in search plugins into its plugin manager
  2. Resolves the active search client (first configured provider wins)
  3. Forwards searches and index maintenance to that client
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from marksift.adapters.base.client import SearchIndexClient
from marksift.adapters.base.exceptions import StoreUnavailableError
from marksift.adapters.base.registry import NoSearchBackendError, PluginManager, PluginType
from marksift.adapters.loader import load_all_plugins
from marksift.adapters.sqlite.scoring import ScoringProfile
from marksift.models.document import BookmarkSearchDocument
from marksift.models.query import SearchOptions
from marksift.models.response import SearchResponse
from marksift.store.models import Bookmark

if TYPE_CHECKING:
    from marksift.config.settings import Settings

logger = logging.getLogger(__name__)


class SearchEngine:
    """Facade over the plugin manager's active search backend.

    Attributes:
        settings: Application configuration.
        plugin_manager: Registry the search backends are loaded into.
    """

    def __init__(
        self,
        settings: Settings,
        plugin_manager: PluginManager | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self.settings = settings
        self.plugin_manager = plugin_manager or PluginManager()
        self._session_factory = session_factory

    async def initialize(self) -> None:
        """Register the built-in backends (idempotent)."""
        load_all_plugins(
            self.plugin_manager,
            session_factory=self._session_factory,
            profile=ScoringProfile(**self.settings.search.scoring.model_dump()),
        )
        logger.info("MarkSift engine initialized")

    async def shutdown(self) -> None:
        """Release every constructed backend client."""
        await self.plugin_manager.shutdown_all()
        logger.info("MarkSift engine shut down")

    async def get_client(self) -> SearchIndexClient:
        """Return the active search client.

        Raises:
            NoSearchBackendError: If no search provider is configured.
        """
        client = await self.plugin_manager.get_client(PluginType.SEARCH)
        if client is None:
            raise NoSearchBackendError(
                "No search backend is configured. "
                f"Registered: {self.plugin_manager.registered_plugins}"
            )
        return client

    @property
    def active_backend(self) -> str | None:
        """Name of the provider searches will use, without constructing it."""
        for entry in self.plugin_manager.registrations(PluginType.SEARCH):
            if entry.provider.is_configured():
                return entry.name
        return None

    # ──────────────────────────────────────────────────────────────────────
    # Search
    # ──────────────────────────────────────────────────────────────────────

    async def search(self, options: SearchOptions) -> SearchResponse:
        """Run an owner-scoped search on the active backend."""
        client = await self.get_client()
        return await client.search(options)

    # ──────────────────────────────────────────────────────────────────────
    # Index maintenance
    # ──────────────────────────────────────────────────────────────────────

    async def index_bookmarks(self, bookmark_ids: Sequence[str]) -> int:
        """(Re)index the given bookmarks from the store.

        Ids that no longer exist in the store are removed from the index.

        Returns:
            Number of documents sent to the backend.
        """
        if not bookmark_ids:
            return 0
        client = await self.get_client()
        documents = await self._load_documents(bookmark_ids)
        await client.update_documents(documents)

        missing = set(bookmark_ids) - {doc.id for doc in documents}
        if missing:
            await client.delete_documents(sorted(missing))
        logger.info("Indexed %d bookmarks, removed %d", len(documents), len(missing))
        return len(documents)

    async def remove_bookmarks(self, bookmark_ids: Sequence[str]) -> None:
        """Remove bookmarks from the index."""
        if not bookmark_ids:
            return
        client = await self.get_client()
        if len(bookmark_ids) == 1:
            await client.delete_document(bookmark_ids[0])
        else:
            await client.delete_documents(bookmark_ids)

    async def _load_documents(self, bookmark_ids: Sequence[str]) -> list[BookmarkSearchDocument]:
        session_factory = self._session_factory
        if session_factory is None:
            from marksift.store.database import get_session_factory

            session_factory = get_session_factory()

        stmt = (
            select(Bookmark)
            .where(Bookmark.id.in_(list(bookmark_ids)))
            .options(
                selectinload(Bookmark.link),
                selectinload(Bookmark.text),
                selectinload(Bookmark.asset),
                selectinload(Bookmark.tags),
            )
        )
        try:
            async with session_factory() as session:
                result = await session.execute(stmt)
                return [BookmarkSearchDocument.from_bookmark(b) for b in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to load bookmarks for indexing: {e}") from e
