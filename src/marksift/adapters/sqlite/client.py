"""SQLite search client — Substring search straight against the bookmark store.

There is no separate index: every search runs against the live tables, so
results are always consistent with the store. The index-maintenance methods
exist only to satisfy ``SearchIndexClient`` and just log.

Usage::

    client = SQLiteIndexClient(session_factory)
    await client.initialize()
    response = await client.search(
        SearchOptions(query="rust", filter=[FilterConstraint.owner("u1")])
    )
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from marksift.adapters.base.client import SearchIndexClient
from marksift.adapters.base.exceptions import StoreUnavailableError
from marksift.adapters.base.filters import extract_owner
from marksift.adapters.sqlite.query import build_count_statement, build_search_statement
from marksift.adapters.sqlite.scoring import RankedCandidate, ScoringProfile, score_candidates
from marksift.models.document import BookmarkSearchDocument
from marksift.models.query import SearchOptions
from marksift.models.response import SearchResponse
from marksift.store.models import Bookmark

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class SQLiteIndexClient(SearchIndexClient):
    """Search client that answers queries from the relational store.

    Args:
        session_factory: Async session factory bound to the bookmark store.
        profile: Scoring boosts and decay.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        profile: ScoringProfile | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._profile = profile or ScoringProfile()
        self._ready = False

    @property
    def name(self) -> str:
        return "sqlite"

    async def initialize(self) -> None:
        """Check that the store answers a trivial query."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailableError(f"Bookmark store is unreachable: {e}") from e
        self._ready = True
        logger.info("SQLite search client ready")

    async def shutdown(self) -> None:
        self._ready = False

    # ── Index maintenance (no-ops) ───────────────────────────────────────

    async def add_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        logger.debug("Indexed %d documents for SQLite search", len(documents))

    async def update_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        await self.add_documents(documents)

    async def delete_document(self, doc_id: str) -> None:
        logger.debug("Deleted document %s from SQLite search", doc_id)

    async def delete_documents(self, doc_ids: Sequence[str]) -> None:
        logger.debug("Deleted %d documents from SQLite search", len(doc_ids))

    async def clear_index(self) -> None:
        logger.debug("Cleared SQLite search index")

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, options: SearchOptions) -> SearchResponse:
        """Owner-scoped substring search with synthesized relevance scores.

        Returns an empty response without querying the store when the
        filters carry no owner constraint.
        """
        start = time.monotonic()

        user_id = extract_owner(options.filter)
        if user_id is None:
            logger.warning("Refusing search without an owner constraint")
            return SearchResponse.empty(processing_time_ms=_elapsed_ms(start))

        if not self._ready:
            raise StoreUnavailableError("SQLite search client not initialized.")

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    build_search_statement(user_id, options.query, options.limit, options.offset)
                )
                bookmarks = result.scalars().all()
                total_hits = await session.scalar(build_count_statement(user_id, options.query))
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"SQLite search failed: {e}") from e

        hits = score_candidates([self._to_candidate(b) for b in bookmarks], options.query, self._profile)
        response = SearchResponse(
            hits=hits,
            total_hits=int(total_hits or 0),
            processing_time_ms=_elapsed_ms(start),
        )
        logger.debug(
            "SQLite search for user %s returned %d/%d hits in %dms",
            user_id,
            len(response.hits),
            response.total_hits,
            response.processing_time_ms,
        )
        return response

    @staticmethod
    def _to_candidate(bookmark: Bookmark) -> RankedCandidate:
        return RankedCandidate(
            id=bookmark.id,
            title=bookmark.title,
            url=bookmark.link.url if bookmark.link else None,
            tags=[tag.name for tag in bookmark.tags],
        )
