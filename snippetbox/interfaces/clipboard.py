"""Clipboard bridge interface.

Defines the abstract base class for reading and writing the clipboard
that snippet execution draws {clipboard} content from.
"""

from abc import ABC, abstractmethod


class BaseClipboard(ABC):
    """Abstract base class for clipboard backends."""

    @abstractmethod
    async def read(self) -> str:
        """Return the current clipboard text.

        Returns:
            The clipboard text; an empty clipboard yields "".

        Raises:
            ClipboardError: If the clipboard cannot be read.
        """

    @abstractmethod
    async def write(self, text: str) -> None:
        """Replace the clipboard contents with ``text``.

        Args:
            text: The text to place on the clipboard.

        Raises:
            ClipboardError: If the clipboard cannot be written.
        """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return a short identifier for logging and health output."""


class ClipboardError(Exception):
    """Exception raised when the clipboard cannot be accessed."""

    pass
