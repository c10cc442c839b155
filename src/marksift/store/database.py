"""SQLAlchemy 2.x async engine and session factory for the bookmark store."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from marksift.config.settings import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""


def create_session_factory(url: str, echo: bool = False, **engine_kwargs: Any) -> async_sessionmaker[AsyncSession]:
    """Build an async engine for ``url`` and return a session factory bound to it."""
    engine = create_async_engine(url, echo=echo, **engine_kwargs)
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory built from ``Settings.database``."""
    db = get_settings().database
    return create_session_factory(db.url, echo=db.echo)
