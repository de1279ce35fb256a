"""Snippet store interface.

Defines the abstract base class for durable snippet storage. The
template engine never talks to the store; callers load a snippet and
hand its text to the executor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class BaseSnippetStore(ABC):
    """Abstract base class for snippet record storage."""

    @abstractmethod
    async def create(self, data: Any) -> Any:
        """Persist a new snippet and return the stored record."""

    @abstractmethod
    async def get(self, snippet_id: int) -> Any | None:
        """Return the snippet with ``snippet_id`` or None."""

    @abstractmethod
    async def list(self, search: str | None = None, active_only: bool = False) -> list[Any]:
        """List snippets, optionally filtered by a keyword/name substring.

        Args:
            search: Case-insensitive substring matched against keyword or name.
            active_only: Only return snippets flagged active.

        Returns:
            Snippets ordered by most recently updated first.
        """

    @abstractmethod
    async def update(self, snippet_id: int, patch: Any) -> Any | None:
        """Apply a partial update; return the updated record or None if missing."""

    @abstractmethod
    async def delete(self, snippet_id: int) -> bool:
        """Delete a snippet; return whether it existed."""

    @abstractmethod
    async def bulk_create(self, items: Sequence[Any]) -> list[Any]:
        """Persist many snippets atomically: either all are stored or none.

        Raises:
            SnippetStoreError: If any record fails; nothing is stored.
        """


class SnippetStoreError(Exception):
    """Exception raised when the snippet store fails."""

    pass
