"""Keyword auto-expansion matcher.

The host's keyboard hook reports key presses as names: single
characters (``"a"``, ``"7"``, ``"-"``) or named keys (``"space"``,
``"enter"``, ``"tab"``, ``"backspace"``). Typed characters accumulate
in a bounded buffer; a terminator key looks the buffer up as a
keyword. On a hit the host erases ``backspaces`` characters and types
the executed snippet text.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TERMINATOR_KEYS = frozenset({"space", "enter", "return", "tab"})
BACKSPACE_KEY = "backspace"


@dataclass(frozen=True)
class Expansion:
    """A keyword hit produced by a terminator key.

    Attributes:
        keyword: The keyword that was typed.
        text: The snippet template registered for the keyword.
        backspaces: Characters the host must erase before typing.
    """

    keyword: str
    text: str
    backspaces: int


class KeywordMap:
    """Keyword to template lookup for active snippets."""

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._snippets: dict[str, str] = dict(pairs)
        self._lock = threading.Lock()

    def update(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Replace every mapping with ``pairs``; later duplicates win."""
        with self._lock:
            self._snippets.clear()
            for keyword, text in pairs:
                self._snippets[keyword] = text
            count = len(self._snippets)
        logger.info(f"Keyword map updated: {count} keyword(s)", extra={"keywords": count})

    def get(self, keyword: str) -> str | None:
        with self._lock:
            return self._snippets.get(keyword)

    def keywords(self) -> list[str]:
        with self._lock:
            return sorted(self._snippets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._snippets)


class KeystrokeBuffer:
    """Bounded buffer of recently typed characters."""

    def __init__(self, max_size: int = 100) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._chars: list[str] = []

    @property
    def contents(self) -> str:
        return "".join(self._chars)

    def feed(self, key: str, keyword_map: KeywordMap) -> Expansion | None:
        """Process one key press.

        Args:
            key: A single printable character or a named key.
            keyword_map: Where terminator keys look the buffer up.

        Returns:
            An Expansion when a terminator completes a known keyword.
        """
        if key in TERMINATOR_KEYS:
            keyword = self.contents.strip()
            self._chars.clear()
            text = keyword_map.get(keyword) if keyword else None
            if text is None:
                return None
            return Expansion(keyword=keyword, text=text, backspaces=len(keyword))

        if key == BACKSPACE_KEY:
            if self._chars:
                self._chars.pop()
            return None

        if len(key) == 1 and key.isprintable():
            self._chars.append(key)
            if len(self._chars) > self._max_size:
                del self._chars[0]

        return None

    def clear(self) -> None:
        self._chars.clear()


class AutoExpander:
    """Feeds key presses to a buffer while expansion is enabled.

    The keyboard hook runs on its own thread, so state changes are
    serialized with a lock.
    """

    def __init__(
        self,
        keyword_map: KeywordMap | None = None,
        buffer: KeystrokeBuffer | None = None,
        enabled: bool = False,
    ) -> None:
        self.keyword_map = keyword_map or KeywordMap()
        self._buffer = buffer or KeystrokeBuffer()
        self._enabled = enabled
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def enable(self) -> None:
        with self._lock:
            self._enabled = True
        logger.info("Auto-expansion enabled")

    def disable(self) -> None:
        with self._lock:
            self._enabled = False
            self._buffer.clear()
        logger.info("Auto-expansion disabled")

    def feed(self, key: str) -> Expansion | None:
        """Process one key press; always None while disabled."""
        with self._lock:
            if not self._enabled:
                return None
            expansion = self._buffer.feed(key, self.keyword_map)

        if expansion is not None:
            logger.info(f"Keyword matched: {expansion.keyword!r}", extra={"keyword": expansion.keyword})
        return expansion

    def feed_many(self, keys: Iterable[str]) -> list[Expansion]:
        """Process key presses in order and collect every expansion."""
        expansions = []
        for key in keys:
            expansion = self.feed(key)
            if expansion is not None:
                expansions.append(expansion)
        return expansions
