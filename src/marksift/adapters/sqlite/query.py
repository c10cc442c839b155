"""Query composition for the store-backed search.

A bookmark matches when it belongs to the owner AND the raw query occurs,
case-insensitively, in at least one searchable field of the bookmark or its
related records. Related records are matched through EXISTS sub-queries so
each bookmark appears at most once.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.orm import selectinload

from marksift.store.models import Bookmark, BookmarkAsset, BookmarkLink, BookmarkTag, BookmarkText


def like_pattern(query: str) -> str:
    return f"%{query}%"


def build_match_predicate(query: str) -> ColumnElement[bool]:
    """OR of substring matches across every searchable field."""
    pattern = like_pattern(query)
    return or_(
        Bookmark.title.ilike(pattern),
        Bookmark.note.ilike(pattern),
        Bookmark.summary.ilike(pattern),
        Bookmark.link.has(
            or_(
                BookmarkLink.title.ilike(pattern),
                BookmarkLink.description.ilike(pattern),
                BookmarkLink.html_content.ilike(pattern),
            )
        ),
        Bookmark.text.has(BookmarkText.text.ilike(pattern)),
        Bookmark.asset.has(BookmarkAsset.content.ilike(pattern)),
        Bookmark.tags.any(BookmarkTag.name.ilike(pattern)),
    )


def build_search_filter(user_id: str, query: str) -> ColumnElement[bool]:
    """Owner constraint (required) AND the multi-field match."""
    return and_(Bookmark.user_id == user_id, build_match_predicate(query))


def build_search_statement(user_id: str, query: str, limit: int, offset: int) -> Select[tuple[Bookmark]]:
    """Page of matching bookmarks, newest first, with link and tags loaded for scoring."""
    return (
        select(Bookmark)
        .where(build_search_filter(user_id, query))
        .options(selectinload(Bookmark.link), selectinload(Bookmark.tags))
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .limit(limit)
        .offset(offset)
    )


def build_count_statement(user_id: str, query: str) -> Select[tuple[int]]:
    """Exact number of matching bookmarks, ignoring pagination."""
    return select(func.count()).select_from(Bookmark).where(build_search_filter(user_id, query))
