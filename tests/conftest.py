"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marksift.adapters.base.client import SearchIndexClient
from marksift.adapters.base.provider import PluginProvider
from marksift.adapters.meilisearch import env as meili_env
from marksift.adapters.sqlite import env as sqlite_env
from marksift.config.settings import Settings
from marksift.models.document import BookmarkSearchDocument
from marksift.models.query import SearchOptions
from marksift.models.response import SearchHit, SearchResponse
from marksift.store.database import Base
from marksift.store.models import Bookmark, BookmarkAsset, BookmarkLink, BookmarkTag, BookmarkText

AddBookmark = Callable[..., Awaitable[Bookmark]]


@pytest.fixture(autouse=True)
def _isolated_gates(monkeypatch: pytest.MonkeyPatch) -> None:
    """Backends read their gates once per process; reset them around each test."""
    for name in ("USE_SQLITE_SEARCH", "MEILI_ADDR", "MEILI_MASTER_KEY", "MEILI_INDEX"):
        monkeypatch.delenv(name, raising=False)
    sqlite_env.get_env_config.cache_clear()
    meili_env.get_env_config.cache_clear()
    yield
    sqlite_env.get_env_config.cache_clear()
    meili_env.get_env_config.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        database={"url": "sqlite+aiosqlite://"},
    )


# ── Bookmark store ───────────────────────────────────────────────────────────


@pytest.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """In-memory SQLite store with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def add_bookmark(session_factory: async_sessionmaker[AsyncSession]) -> AddBookmark:
    """Insert a bookmark with optional related records."""

    async def _add(
        bookmark_id: str,
        *,
        user_id: str = "u1",
        created_at: datetime,
        title: str | None = None,
        note: str | None = None,
        summary: str | None = None,
        url: str | None = None,
        link_title: str | None = None,
        link_description: str | None = None,
        html_content: str | None = None,
        text: str | None = None,
        asset_content: str | None = None,
        tags: Sequence[str] = (),
    ) -> Bookmark:
        async with session_factory() as session:
            bookmark = Bookmark(
                id=bookmark_id,
                user_id=user_id,
                title=title,
                note=note,
                summary=summary,
                created_at=created_at,
            )
            if url is not None:
                bookmark.link = BookmarkLink(
                    url=url,
                    title=link_title,
                    description=link_description,
                    html_content=html_content,
                )
            if text is not None:
                bookmark.text = BookmarkText(text=text)
            if asset_content is not None:
                bookmark.asset = BookmarkAsset(content=asset_content)
            for name in tags:
                tag_id = f"tag-{user_id}-{name}"
                tag = await session.get(BookmarkTag, tag_id)
                if tag is None:
                    tag = BookmarkTag(id=tag_id, user_id=user_id, name=name)
                bookmark.tags.append(tag)
            session.add(bookmark)
            await session.commit()
            return bookmark

    return _add


# ── Fake plugins ─────────────────────────────────────────────────────────────


class FakeSearchClient(SearchIndexClient):
    """In-memory client that records calls."""

    def __init__(self, label: str = "fake", fail_on_init: Exception | None = None) -> None:
        self.label = label
        self.fail_on_init = fail_on_init
        self.initialized = False
        self.shut_down = False
        self.calls: list[tuple[str, object]] = []

    @property
    def name(self) -> str:
        return self.label

    async def initialize(self) -> None:
        if self.fail_on_init is not None:
            raise self.fail_on_init
        self.initialized = True

    async def shutdown(self) -> None:
        self.shut_down = True

    async def add_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        self.calls.append(("add_documents", list(documents)))

    async def update_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        self.calls.append(("update_documents", list(documents)))

    async def delete_document(self, doc_id: str) -> None:
        self.calls.append(("delete_document", doc_id))

    async def delete_documents(self, doc_ids: Sequence[str]) -> None:
        self.calls.append(("delete_documents", list(doc_ids)))

    async def search(self, options: SearchOptions) -> SearchResponse:
        self.calls.append(("search", options))
        return SearchResponse(hits=[SearchHit(id=f"{self.label}-1", score=1.0)], total_hits=1)

    async def clear_index(self) -> None:
        self.calls.append(("clear_index", None))


class FakeProvider(PluginProvider[FakeSearchClient]):
    """Provider with a fixed gate that counts client constructions."""

    def __init__(self, configured: bool, label: str = "fake", fail_on_init: Exception | None = None) -> None:
        super().__init__()
        self.configured = configured
        self.label = label
        self.fail_on_init = fail_on_init
        self.created = 0
        self.clients: list[FakeSearchClient] = []

    def is_configured(self) -> bool:
        return self.configured

    def _create_client(self) -> FakeSearchClient:
        self.created += 1
        client = FakeSearchClient(self.label, fail_on_init=self.fail_on_init)
        self.clients.append(client)
        return client


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    return FakeProvider
