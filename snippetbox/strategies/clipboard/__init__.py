"""Clipboard bridge strategies."""

from snippetbox.strategies.clipboard.memory import MemoryClipboard
from snippetbox.strategies.clipboard.system import SystemClipboard

__all__ = [
    "MemoryClipboard",
    "SystemClipboard",
]
