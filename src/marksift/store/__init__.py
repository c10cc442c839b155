"""Bookmark store — SQLAlchemy schema and async session factory."""

from marksift.store.database import Base, create_session_factory, get_session_factory
from marksift.store.models import Bookmark, BookmarkAsset, BookmarkLink, BookmarkTag, BookmarkText

__all__ = [
    "Base",
    "Bookmark",
    "BookmarkAsset",
    "BookmarkLink",
    "BookmarkTag",
    "BookmarkText",
    "create_session_factory",
    "get_session_factory",
]
