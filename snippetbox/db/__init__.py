"""Database models and session management."""

from snippetbox.db.models import (
    Snippet,
    SnippetCreate,
    SnippetRead,
    SnippetUpdate,
)
from snippetbox.db.repository import SnippetRepository
from snippetbox.db.session import Database

__all__ = [
    # Models
    "Snippet",
    "SnippetCreate",
    "SnippetRead",
    "SnippetUpdate",
    # Store
    "SnippetRepository",
    "Database",
]
