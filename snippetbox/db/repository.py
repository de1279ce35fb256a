"""SQL-backed snippet store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.db.models import Snippet, SnippetCreate, SnippetUpdate, utcnow
from snippetbox.interfaces.snippet_store import BaseSnippetStore, SnippetStoreError

logger = logging.getLogger(__name__)


class SnippetRepository(BaseSnippetStore):
    """CRUD and search over the ``snippets`` table for one session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, data: SnippetCreate) -> Snippet:
        snippet = Snippet.model_validate(data)
        try:
            self._session.add(snippet)
            await self._session.commit()
            await self._session.refresh(snippet)
        except SQLAlchemyError as e:
            logger.error(f"Database error creating snippet: {e}", exc_info=True)
            await self._session.rollback()
            raise SnippetStoreError("Failed to create snippet") from e

        logger.info(f"Created snippet {snippet.id} ({snippet.keyword!r})")
        return snippet

    async def get(self, snippet_id: int) -> Snippet | None:
        try:
            return await self._session.get(Snippet, snippet_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching snippet {snippet_id}: {e}", exc_info=True)
            raise SnippetStoreError("Failed to fetch snippet") from e

    async def list(self, search: str | None = None, active_only: bool = False) -> list[Snippet]:
        query = select(Snippet)

        if search:
            term = search.lower()
            query = query.where(
                or_(
                    func.lower(Snippet.keyword).contains(term, autoescape=True),
                    func.lower(Snippet.name).contains(term, autoescape=True),
                )
            )
        if active_only:
            query = query.where(Snippet.active.is_(True))

        query = query.order_by(Snippet.updated_at.desc(), Snippet.id.desc())

        try:
            result = await self._session.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Database error listing snippets: {e}", exc_info=True)
            raise SnippetStoreError("Failed to list snippets") from e

        return list(result.scalars().all())

    async def get_by_keyword(self, keyword: str, active_only: bool = True) -> Snippet | None:
        """Return the most recently updated snippet with exactly this keyword."""
        query = select(Snippet).where(Snippet.keyword == keyword)
        if active_only:
            query = query.where(Snippet.active.is_(True))
        query = query.order_by(Snippet.updated_at.desc(), Snippet.id.desc()).limit(1)

        try:
            result = await self._session.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching keyword {keyword!r}: {e}", exc_info=True)
            raise SnippetStoreError("Failed to fetch snippet by keyword") from e

        return result.scalar_one_or_none()

    async def update(self, snippet_id: int, patch: SnippetUpdate) -> Snippet | None:
        snippet = await self.get(snippet_id)
        if snippet is None:
            return None

        changes: dict[str, Any] = patch.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(snippet, field, value)
        snippet.updated_at = utcnow()

        try:
            self._session.add(snippet)
            await self._session.commit()
            await self._session.refresh(snippet)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating snippet {snippet_id}: {e}", exc_info=True)
            await self._session.rollback()
            raise SnippetStoreError("Failed to update snippet") from e

        logger.info(f"Updated snippet {snippet_id}: {sorted(changes)}")
        return snippet

    async def delete(self, snippet_id: int) -> bool:
        snippet = await self.get(snippet_id)
        if snippet is None:
            return False

        try:
            await self._session.delete(snippet)
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting snippet {snippet_id}: {e}", exc_info=True)
            await self._session.rollback()
            raise SnippetStoreError("Failed to delete snippet") from e

        logger.info(f"Deleted snippet {snippet_id}")
        return True

    async def bulk_create(self, items: Sequence[Any]) -> list[Snippet]:
        """Store every item in one transaction.

        Items only need ``keyword``, ``name`` and ``text`` attributes;
        ``active`` defaults to True.
        """
        snippets = [
            Snippet(
                keyword=item.keyword,
                name=item.name,
                text=item.text,
                active=getattr(item, "active", True),
            )
            for item in items
        ]

        try:
            self._session.add_all(snippets)
            await self._session.commit()
            for snippet in snippets:
                await self._session.refresh(snippet)
        except SQLAlchemyError as e:
            logger.error(f"Database error in bulk create, nothing stored: {e}", exc_info=True)
            await self._session.rollback()
            raise SnippetStoreError("Failed to store snippets") from e

        logger.info(f"Stored {len(snippets)} snippet(s) in one batch")
        return snippets
