"""Bookmark search document — Flattened shape consumed by indexing backends.

Backends that keep their own index (e.g. MeiliSearch) receive these
documents from ``add_documents()`` / ``update_documents()``. Field names are
serialized in camelCase so that the owner filter reads ``userId``.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from marksift.store.models import Bookmark


class BookmarkSearchDocument(BaseModel):
    """Searchable projection of a bookmark and its related records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Bookmark identifier")
    user_id: str = Field(description="Owner identity")
    title: str | None = Field(default=None)
    note: str | None = Field(default=None)
    summary: str | None = Field(default=None)
    url: str | None = Field(default=None, description="Link URL")
    link_title: str | None = Field(default=None)
    link_description: str | None = Field(default=None)
    content: str | None = Field(default=None, description="Raw link content")
    text: str | None = Field(default=None, description="Extracted body text")
    asset_content: str | None = Field(default=None, description="Attached file content")
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None)
    modified_at: datetime | None = Field(default=None)

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> BookmarkSearchDocument:
        """Flatten an ORM bookmark (with link, text, asset and tags loaded)."""
        link = bookmark.link
        return cls(
            id=bookmark.id,
            user_id=bookmark.user_id,
            title=bookmark.title,
            note=bookmark.note,
            summary=bookmark.summary,
            url=link.url if link else None,
            link_title=link.title if link else None,
            link_description=link.description if link else None,
            content=link.html_content if link else None,
            text=bookmark.text.text if bookmark.text else None,
            asset_content=bookmark.asset.content if bookmark.asset else None,
            tags=[tag.name for tag in bookmark.tags],
            created_at=bookmark.created_at,
            modified_at=bookmark.modified_at,
        )

    def to_index_payload(self) -> dict:
        """Serialize for a search index (camelCase keys, ISO timestamps)."""
        return self.model_dump(mode="json", by_alias=True)
