"""System clipboard strategy backed by pyperclip."""

import asyncio
import logging

import pyperclip

from snippetbox.interfaces.clipboard import BaseClipboard, ClipboardError

logger = logging.getLogger(__name__)


class SystemClipboard(BaseClipboard):
    """Reads and writes the operating system clipboard.

    pyperclip calls block on the platform clipboard tool, so they run
    in a worker thread.
    """

    @property
    def backend_name(self) -> str:
        return "system"

    async def read(self) -> str:
        try:
            text = await asyncio.to_thread(pyperclip.paste)
        except pyperclip.PyperclipException as e:
            logger.warning(f"System clipboard unavailable for read: {e}")
            raise ClipboardError(f"Clipboard read failed: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected clipboard read error: {e}", exc_info=True)
            raise ClipboardError(f"Clipboard read failed: {e}") from e

        return text or ""

    async def write(self, text: str) -> None:
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except pyperclip.PyperclipException as e:
            logger.warning(f"System clipboard unavailable for write: {e}")
            raise ClipboardError(f"Clipboard write failed: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected clipboard write error: {e}", exc_info=True)
            raise ClipboardError(f"Clipboard write failed: {e}") from e

        logger.debug(f"Wrote {len(text)} chars to system clipboard")
