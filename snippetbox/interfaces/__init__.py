"""Abstract base classes for external collaborators."""

from snippetbox.interfaces.clipboard import BaseClipboard, ClipboardError
from snippetbox.interfaces.snippet_store import BaseSnippetStore, SnippetStoreError

__all__ = [
    "BaseClipboard",
    "ClipboardError",
    "BaseSnippetStore",
    "SnippetStoreError",
]
