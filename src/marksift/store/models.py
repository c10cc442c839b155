"""Bookmark store schema.

Only the tables the search layer reads are modelled here: bookmarks and
their one-to-one link / text / asset projections, plus tags.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marksift.store.database import Base

tags_on_bookmarks = Table(
    "tags_on_bookmarks",
    Base.metadata,
    Column("bookmark_id", String, ForeignKey("bookmarks.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String, ForeignKey("bookmark_tags.id", ondelete="CASCADE"), primary_key=True),
    Column("attached_at", DateTime(timezone=True), server_default=func.now()),
)


class Bookmark(Base):
    """A saved bookmark owned by one user."""

    __tablename__ = "bookmarks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, index=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    modified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    link: Mapped["BookmarkLink | None"] = relationship(back_populates="bookmark", uselist=False)
    text: Mapped["BookmarkText | None"] = relationship(back_populates="bookmark", uselist=False)
    asset: Mapped["BookmarkAsset | None"] = relationship(back_populates="bookmark", uselist=False)
    tags: Mapped[list["BookmarkTag"]] = relationship(secondary=tags_on_bookmarks, order_by="BookmarkTag.name")


class BookmarkLink(Base):
    """Crawled metadata for a link bookmark."""

    __tablename__ = "bookmark_links"

    id: Mapped[str] = mapped_column(String, ForeignKey("bookmarks.id", ondelete="CASCADE"), primary_key=True)
    url: Mapped[str] = mapped_column(Text)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    html_content: Mapped[str | None] = mapped_column(Text, nullable=True)

    bookmark: Mapped[Bookmark] = relationship(back_populates="link")


class BookmarkText(Base):
    """Extracted plain-text body of a bookmark."""

    __tablename__ = "bookmark_texts"

    id: Mapped[str] = mapped_column(String, ForeignKey("bookmarks.id", ondelete="CASCADE"), primary_key=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)

    bookmark: Mapped[Bookmark] = relationship(back_populates="text")


class BookmarkAsset(Base):
    """Attached file (PDF, image) with its extracted content."""

    __tablename__ = "bookmark_assets"

    id: Mapped[str] = mapped_column(String, ForeignKey("bookmarks.id", ondelete="CASCADE"), primary_key=True)
    asset_type: Mapped[str] = mapped_column(String(32), default="pdf")
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    bookmark: Mapped[Bookmark] = relationship(back_populates="asset")


class BookmarkTag(Base):
    """A user-defined tag."""

    __tablename__ = "bookmark_tags"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, index=True)
    name: Mapped[str] = mapped_column(String(255))
