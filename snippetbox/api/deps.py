"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- Database sessions
- Snippet repository
- Executor, clipboard, auto-expander and log buffer services

Services are created in the application lifespan and live on
``app.state``; these functions only hand them out.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core.logging_config import RecentLogBuffer
from snippetbox.db.repository import SnippetRepository
from snippetbox.db.session import Database
from snippetbox.strategies.expansion import AutoExpander
from snippetbox.strategies.template_engine import SnippetExecutor

logger = logging.getLogger(__name__)


def get_database(request: Request) -> Database:
    """Return the application's Database service."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None or not database.is_open:
        logger.error("Database requested before application startup completed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not available",
        )
    return database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions.

    Args:
        database: The application's Database service.

    Yields:
        An async database session.
    """
    async with database.session() as session:
        yield session


async def get_repository(
    session: AsyncSession = Depends(get_db),
) -> SnippetRepository:
    """Dependency for a snippet repository bound to the request's session."""
    return SnippetRepository(session)


def get_executor(request: Request) -> SnippetExecutor:
    """Return the application's snippet executor."""
    return request.app.state.executor


def get_auto_expander(request: Request) -> AutoExpander:
    """Return the application's keyword auto-expander."""
    return request.app.state.auto_expander


def get_log_buffer(request: Request) -> RecentLogBuffer:
    """Return the application's recent-log buffer."""
    return request.app.state.log_buffer
