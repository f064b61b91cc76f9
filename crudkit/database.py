"""
crudkit — Async SQLAlchemy Helpers
====================================

What:  Engine, session factory and declarative base for SQLAlchemyRecordModel.
How:   create_engine_from_settings() builds an AsyncEngine from
       settings.database_url; build_session_factory() wraps it in an
       async_sessionmaker with expire_on_commit=False.
Who:   Applications that back their repositories with SQLAlchemy, and the
       test suite (in-memory SQLite through aiosqlite).

expire_on_commit=False matters: SQLAlchemyRecordModel returns ORM instances
after their session has closed, and expired attributes would try to
lazy-load through a session that no longer exists.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from crudkit.config import settings


class Base(DeclarativeBase):
    """Base class for ORM models exposed through SQLAlchemyRecordModel."""
    pass


def create_engine_from_settings(
    url: Optional[str] = None,
    echo: Optional[bool] = None,
) -> AsyncEngine:
    """
    Create an async engine.

    Args:
        url:  Connection URL override (defaults to settings.database_url).
        echo: SQL echo override (defaults to settings.db_echo).
    """
    return create_async_engine(
        url or settings.database_url,
        echo=settings.db_echo if echo is None else echo,
        pool_pre_ping=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory with the configuration SQLAlchemyRecordModel expects."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_all(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (tests and prototypes)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections. Call on application shutdown."""
    await engine.dispose()
