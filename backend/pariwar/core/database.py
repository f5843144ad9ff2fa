"""Database configuration and store handle.

This module builds an asynchronous SQLAlchemy engine and session factory
wrapped in a :class:`Store`.  A store is constructed explicitly from the
settings at application startup and attached to ``app.state``; nothing
in this module holds a process-wide connection.

Connection strings are normalised for async usage: plain SQLite URLs are
upgraded to ``aiosqlite`` and every PostgreSQL flavour (including the
``postgres://`` scheme handed out by hosted providers) is routed through
``psycopg``.

When ``DATABASE_URL`` is missing the behaviour depends on
``STARTUP_MODE``: ``demo`` logs and carries on without a store, while
``strict`` refuses to start.  A failure to open or migrate a configured
database is always fatal.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from pariwar.core.config import Settings

logger = logging.getLogger(__name__)

# Declarative base
Base = declarative_base()

_POSTGRES_DRIVERS = {
    "postgres",
    "postgresql",
    "postgresql+psycopg",
    "postgresql+psycopg2",
    "postgresql+asyncpg",
}


class StoreError(RuntimeError):
    """Base class for store setup failures."""


class StoreNotConfiguredError(StoreError):
    """Raised when a database is required but ``DATABASE_URL`` is unset."""


class StoreConnectionError(StoreError):
    """Raised when the database cannot be opened or migrated."""


def normalize_database_url(raw_url: str) -> URL:
    """Return ``raw_url`` rewritten to use an async driver."""
    url_obj = make_url(raw_url)
    driver = url_obj.drivername or ""
    if driver == "sqlite":
        return url_obj.set(drivername="sqlite+aiosqlite")
    if driver in _POSTGRES_DRIVERS:
        return url_obj.set(drivername="postgresql+psycopg")
    return url_obj


class Store:
    """Handle on one database: engine, session factory and schema helpers."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        try:
            self.url = normalize_database_url(database_url)
            self.engine: AsyncEngine = create_async_engine(self.url, echo=echo, pool_pre_ping=True)
        except (SQLAlchemyError, ImportError) as exc:
            raise StoreConnectionError(f"Failed to connect to database: {exc}") from exc
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def masked_url(self) -> str:
        return self.url.render_as_string(hide_password=True)

    async def auto_migrate(self) -> None:
        """Create any missing tables declared on :data:`Base`.

        ``create_all`` only issues ``CREATE TABLE`` for tables that do not
        exist yet, so calling this repeatedly is safe.
        """
        # Import all models to ensure metadata is populated
        from pariwar.models import tables  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StoreConnectionError(f"Failed to migrate database: {exc}") from exc

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def table_names(self) -> list[str]:
        """Return the names of the tables present in the database."""
        async with self.engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that is closed on exit."""
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()

    def debug_info(self) -> Dict[str, Any]:
        """Return non-sensitive information about the engine for debugging."""
        return {
            "drivername": self.url.drivername,
            "username": self.url.username,
            "host": self.url.host,
            "port": self.url.port,
            "database": self.url.database,
            "url": self.masked_url,
        }


async def open_store(settings: Settings) -> Optional[Store]:
    """Open and migrate the configured database.

    Returns ``None`` in demo mode when no ``DATABASE_URL`` is set.
    """
    if not settings.DATABASE_URL:
        if settings.STARTUP_MODE == "strict":
            raise StoreNotConfiguredError("DATABASE_URL must be set when STARTUP_MODE=strict")
        logger.info("DATABASE_URL not set. Running without database for demo.")
        return None

    store = Store(settings.DATABASE_URL, echo=settings.DB_ECHO)
    logger.info("Connecting to database at %s. Migrating tables...", store.masked_url)
    try:
        await store.auto_migrate()
    except StoreConnectionError:
        logger.error("Database migration failed for %s", store.masked_url)
        await store.dispose()
        raise
    logger.info("Database migrated.")
    return store
