"""Keyword auto-expansion strategies."""

from snippetbox.strategies.expansion.matcher import (
    AutoExpander,
    Expansion,
    KeystrokeBuffer,
    KeywordMap,
)

__all__ = [
    "AutoExpander",
    "Expansion",
    "KeystrokeBuffer",
    "KeywordMap",
]
