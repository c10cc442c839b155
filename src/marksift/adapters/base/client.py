"""Search index client — Abstract interface shared by every search backend.

Every search backend must implement this interface to integrate with MarkSift.
The client is responsible for:
  1. Keeping its index in step with the bookmark store (add/update/delete/clear)
  2. Answering owner-scoped searches with scored hits
  3. Acquiring and releasing its connections (initialize/shutdown)

Backends that query the store live have no index to maintain; their
mutation methods are no-ops kept only to satisfy this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from marksift.models.document import BookmarkSearchDocument
from marksift.models.query import SearchOptions
from marksift.models.response import SearchResponse


class SearchIndexClient(ABC):
    """Abstract base class for search index clients.

    None of the mutation methods may raise for an empty input collection.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique backend name (e.g., 'sqlite', 'meilisearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Acquire connections and verify the backend is reachable.

        Called once by the owning provider before the client is handed out.
        """

    async def shutdown(self) -> None:
        """Release connections. The default implementation holds none."""

    @abstractmethod
    async def add_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        """Add documents to the index."""

    @abstractmethod
    async def update_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        """Replace indexed documents with fresh copies."""

    @abstractmethod
    async def delete_document(self, doc_id: str) -> None:
        """Remove a single document from the index."""

    @abstractmethod
    async def delete_documents(self, doc_ids: Sequence[str]) -> None:
        """Remove several documents from the index."""

    @abstractmethod
    async def search(self, options: SearchOptions) -> SearchResponse:
        """Execute an owner-scoped search.

        Args:
            options: Query, filters and pagination.

        Returns:
            Hits sorted by descending score plus the total match count.
            An empty response when ``options.filter`` carries no owner
            constraint.
        """

    @abstractmethod
    async def clear_index(self) -> None:
        """Drop every document from the index."""
