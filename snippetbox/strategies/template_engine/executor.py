"""Snippet executor.

Turns a template into final text in three ordered passes over the
tokens of the original template:

1. arguments  -> resolved values
2. {clipboard} -> one clipboard snapshot
3. {cursor}   -> removed; the first one's offset is reported

Each pass only rewrites placeholder tokens found in the template itself,
so text introduced by an earlier pass is never read as a placeholder.
"""

import logging
from collections.abc import Mapping, Sequence

from snippetbox.interfaces.clipboard import BaseClipboard, ClipboardError
from snippetbox.strategies.template_engine.models import ExecutionResult
from snippetbox.strategies.template_engine.parser import PlaceholderParser, Token, TokenKind
from snippetbox.strategies.template_engine.resolver import ArgumentResolver

logger = logging.getLogger(__name__)


def substitute_arguments(tokens: Sequence[Token], values: Mapping[str, str]) -> list[Token]:
    """Replace every argument token with its value as an opaque literal."""
    substituted: list[Token] = []
    for token in tokens:
        if token.kind is TokenKind.ARGUMENT and token.spec is not None:
            substituted.append(Token(TokenKind.LITERAL, values.get(token.spec.name, "")))
        else:
            substituted.append(token)
    return substituted


def substitute_clipboard(tokens: Sequence[Token], clipboard: str) -> list[Token]:
    """Replace every clipboard token with the same clipboard snapshot."""
    return [
        Token(TokenKind.LITERAL, clipboard) if token.kind is TokenKind.CLIPBOARD else token
        for token in tokens
    ]


def substitute_cursor(tokens: Sequence[Token]) -> ExecutionResult:
    """Drop all cursor tokens and report where the first one was.

    The index is an offset into the returned, cursor-free text.
    """
    parts: list[str] = []
    length = 0
    cursor_index: int | None = None

    for token in tokens:
        if token.kind is TokenKind.CURSOR:
            if cursor_index is None:
                cursor_index = length
            continue
        parts.append(token.text)
        length += len(token.text)

    return ExecutionResult(result="".join(parts), cursor_index=cursor_index)


class SnippetExecutor:
    """Runs the argument, clipboard and cursor passes over a template.

    Example:
        ```python
        executor = SnippetExecutor(clipboard=MemoryClipboard("pasted"))
        outcome = await executor.execute(
            'Hi {argument name="who" default="Bob"}, {clipboard}{cursor}',
            {},
        )
        assert outcome.result == "Hi Bob, pasted"
        assert outcome.cursor_index == 14
        ```
    """

    def __init__(
        self,
        clipboard: BaseClipboard | None = None,
        parser: PlaceholderParser | None = None,
        resolver: ArgumentResolver | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            clipboard: Source of {clipboard} content. Without one, the
                clipboard is treated as empty.
            parser: Placeholder parser to use.
            resolver: Argument resolver to use.
        """
        self._clipboard = clipboard
        self._parser = parser or PlaceholderParser()
        self._resolver = resolver or ArgumentResolver()

    @property
    def clipboard(self) -> BaseClipboard | None:
        return self._clipboard

    def render(
        self,
        text: str,
        supplied_values: Mapping[str, str] | None,
        clipboard_content: str,
    ) -> ExecutionResult:
        """Run all three passes with an already captured clipboard snapshot.

        Pure: identical inputs always give identical output.

        Args:
            text: Raw template text.
            supplied_values: User-chosen argument values keyed by name.
            clipboard_content: Text to use for every {clipboard}.

        Returns:
            The final text and the cursor offset, if any.
        """
        tokens = self._parser.tokenize(text)
        return self._run(tokens, supplied_values, clipboard_content)

    async def execute(
        self,
        text: str,
        supplied_values: Mapping[str, str] | None = None,
    ) -> ExecutionResult:
        """Execute a template, reading the clipboard once if it is referenced.

        A failed clipboard read is logged and treated as an empty clipboard.

        Args:
            text: Raw template text.
            supplied_values: User-chosen argument values keyed by name.

        Returns:
            The final text and the cursor offset, if any.
        """
        tokens = self._parser.tokenize(text)

        clipboard_content = ""
        if any(token.kind is TokenKind.CLIPBOARD for token in tokens):
            clipboard_content = await self._read_clipboard()

        return self._run(tokens, supplied_values, clipboard_content)

    async def copy(self, text: str) -> None:
        """Write produced text to the clipboard.

        Raises:
            ClipboardError: If no clipboard is configured or the write fails.
        """
        if self._clipboard is None:
            raise ClipboardError("No clipboard backend configured")
        await self._clipboard.write(text)
        logger.info(
            f"Wrote {len(text)} chars to the {self._clipboard.backend_name} clipboard",
            extra={"length": len(text), "backend": self._clipboard.backend_name},
        )

    async def _read_clipboard(self) -> str:
        if self._clipboard is None:
            return ""
        try:
            return await self._clipboard.read()
        except Exception as e:
            logger.warning(
                f"Clipboard read failed, using empty text: {e}",
                extra={"backend": self._clipboard.backend_name},
                exc_info=True,
            )
            return ""

    def _run(
        self,
        tokens: Sequence[Token],
        supplied_values: Mapping[str, str] | None,
        clipboard_content: str,
    ) -> ExecutionResult:
        specs = [token.spec for token in tokens if token.spec is not None]
        values = self._resolver.resolve(specs, supplied_values)

        tokens = substitute_arguments(tokens, values)
        tokens = substitute_clipboard(tokens, clipboard_content)
        outcome = substitute_cursor(tokens)

        logger.info(
            f"Executed snippet: {len(values)} argument(s), "
            f"clipboard {len(clipboard_content)} chars, cursor at {outcome.cursor_index}",
            extra={
                "arguments": len(values),
                "clipboard_length": len(clipboard_content),
                "cursor_index": outcome.cursor_index,
            },
        )
        return outcome


def render_template(
    text: str,
    supplied_values: Mapping[str, str] | None = None,
    clipboard_content: str = "",
) -> ExecutionResult:
    """Module-level shortcut for ``SnippetExecutor().render``."""
    return SnippetExecutor().render(text, supplied_values, clipboard_content)
