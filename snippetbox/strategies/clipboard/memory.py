"""In-process clipboard strategy.

Used for headless deployments and tests where no desktop clipboard
exists.
"""

import logging

from snippetbox.interfaces.clipboard import BaseClipboard, ClipboardError

logger = logging.getLogger(__name__)


class MemoryClipboard(BaseClipboard):
    """Clipboard that lives in this object.

    Attributes:
        text: Current clipboard contents.
        fail_reads: When True, read() raises ClipboardError.
        fail_writes: When True, write() raises ClipboardError.
    """

    def __init__(
        self,
        text: str = "",
        fail_reads: bool = False,
        fail_writes: bool = False,
    ) -> None:
        self.text = text
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.read_count = 0

    @property
    def backend_name(self) -> str:
        return "memory"

    async def read(self) -> str:
        self.read_count += 1
        if self.fail_reads:
            raise ClipboardError("Clipboard read failed: memory clipboard is set to fail")
        return self.text

    async def write(self, text: str) -> None:
        if self.fail_writes:
            raise ClipboardError("Clipboard write failed: memory clipboard is set to fail")
        self.text = text
        logger.debug(f"Wrote {len(text)} chars to memory clipboard")
