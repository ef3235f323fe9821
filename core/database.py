"""Async engine, session factory and schema helpers."""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import get_settings


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


def utcnow() -> datetime:
    """Timezone-aware current time for column defaults."""
    return datetime.now(timezone.utc)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine with pool options for the backend.

    SQLite (tests, local runs) gets a single shared connection so an
    in-memory database survives across sessions; PostgreSQL gets the
    configured pool size.
    """
    options: dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    elif database_url.startswith("postgresql"):
        settings = get_settings()
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return create_async_engine(database_url, **options)


class DatabaseManager:
    """Lazily builds one engine and session maker per process."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            settings = get_settings()
            self._engine = build_engine(settings.database_url, echo=settings.debug)
            self._session_maker = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        self.get_engine()
        assert self._session_maker is not None
        return self._session_maker

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self.reset()

    def reset(self) -> None:
        """Forget the cached engine so the next call rebuilds from settings."""
        self._engine = None
        self._session_maker = None


_db_manager = DatabaseManager()


def get_engine() -> AsyncEngine:
    return _db_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _db_manager.get_session_maker()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; stores commit their own writes, leftovers are committed here."""
    async with get_session_maker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(drop_existing: bool = False) -> None:
    """Create all tables, optionally dropping them first (development and tests)."""
    import models  # noqa: F401  registers mappers on Base.metadata

    async with get_engine().begin() as conn:
        if drop_existing:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await _db_manager.close()


def reset_engine() -> None:
    _db_manager.reset()
