"""Database session management for the async snippet store.

``Database`` owns the engine and session maker. The application creates
one in its lifespan, opens it on startup and closes it on shutdown.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from snippetbox.core.config import Settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str, echo: bool) -> dict[str, Any]:
    """Build create_async_engine keyword arguments for the URL's backend."""
    url = make_url(database_url)
    options: dict[str, Any] = {"echo": echo, "future": True}

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every session gets its own empty DB.
            options["poolclass"] = StaticPool
    else:
        options.update(pool_pre_ping=True, pool_size=10, max_overflow=20)

    return options


class Database:
    """Async engine and session factory for the snippet store.

    Example:
        ```python
        database = Database(settings)
        await database.open()
        async with database.session() as session:
            repo = SnippetRepository(session)
            snippets = await repo.list()
        await database.close()
        ```
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    async def open(self) -> None:
        """Create the engine and make sure all tables exist."""
        if self._engine is not None:
            return

        try:
            logger.info(f"Creating async database engine: {self._settings.database_url}")

            self._engine = create_async_engine(
                self._settings.database_url,
                **_engine_options(
                    self._settings.database_url,
                    echo=self._settings.log_level == "DEBUG",
                ),
            )
            self._session_maker = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            await self.create_all_tables()
            logger.info("Database opened successfully")

        except Exception as e:
            logger.error(f"Failed to open database: {e}", exc_info=True)
            await self.close()
            raise

    async def create_all_tables(self) -> None:
        """Create all database tables registered with SQLModel metadata."""
        # Import models to ensure they're registered with SQLModel metadata
        from snippetbox.db import models  # noqa: F401

        logger.info("Creating database tables...")
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_all_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data.
        """
        logger.warning("Dropping all database tables...")
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        logger.warning("All database tables dropped")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session, rolling back if the block raises."""
        if self._session_maker is None:
            raise RuntimeError("Database is not open")

        async with self._session_maker() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                logger.error(f"Database error: {e}", exc_info=True)
                await session.rollback()
                raise
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose of the engine and all pooled connections."""
        if self._engine is not None:
            logger.info("Closing database engine...")
            await self._engine.dispose()
            logger.info("Database engine closed")
        self._engine = None
        self._session_maker = None
