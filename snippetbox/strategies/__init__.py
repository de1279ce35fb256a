"""Concrete strategy implementations."""

from snippetbox.strategies.clipboard import (
    MemoryClipboard,
    SystemClipboard,
)
from snippetbox.strategies.expansion import (
    AutoExpander,
)
from snippetbox.strategies.template_engine import (
    SnippetExecutor,
)

__all__ = [
    "MemoryClipboard",
    "SystemClipboard",
    "AutoExpander",
    "SnippetExecutor",
]
