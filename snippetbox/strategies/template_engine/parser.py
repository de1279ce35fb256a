"""Placeholder parser.

Scans snippet templates for the three placeholder kinds:

    {clipboard}
    {cursor}
    {argument name="X" options="A,B,C" default="A"}

``options`` and ``default`` are optional and may appear in either order
after ``name``. Anything that does not match exactly is plain text.
"""

import enum
import logging
import re
from dataclasses import dataclass

from snippetbox.strategies.template_engine.models import ArgumentSpec

logger = logging.getLogger(__name__)

CLIPBOARD_TOKEN = "{clipboard}"
CURSOR_TOKEN = "{cursor}"

ARGUMENT_PATTERN = (
    r'\{argument\s+name="(?P<name>[^"]+)"'
    r'(?:'
    r'\s+options="(?P<options>[^"]+)"(?:\s+default="(?P<default>[^"]+)")?'
    r'|'
    r'\s+default="(?P<default_first>[^"]+)"(?:\s+options="(?P<options_last>[^"]+)")?'
    r')?\}'
)

PLACEHOLDER_REGEX = re.compile(
    rf"(?P<argument>{ARGUMENT_PATTERN})"
    rf"|(?P<clipboard>{re.escape(CLIPBOARD_TOKEN)})"
    rf"|(?P<cursor>{re.escape(CURSOR_TOKEN)})"
)


class TokenKind(str, enum.Enum):
    """Kinds of template segments."""

    LITERAL = "literal"
    ARGUMENT = "argument"
    CLIPBOARD = "clipboard"
    CURSOR = "cursor"


@dataclass(frozen=True)
class Token:
    """A contiguous segment of a template.

    Attributes:
        kind: What the segment is.
        text: The segment's source text. For literals this is the output text.
        spec: The parsed argument, for ARGUMENT tokens only.
    """

    kind: TokenKind
    text: str
    spec: ArgumentSpec | None = None


def split_options(raw: str) -> tuple[str, ...]:
    """Split an options attribute on ',' and trim each piece.

    Empty pieces are kept so ``"A,,B"`` yields ``("A", "", "B")``.
    """
    return tuple(piece.strip() for piece in raw.split(","))


def spec_from_match(match: re.Match[str]) -> ArgumentSpec:
    """Build an ArgumentSpec from an ARGUMENT_PATTERN match."""
    options = match.group("options") or match.group("options_last")
    default = match.group("default") or match.group("default_first")
    return ArgumentSpec(
        name=match.group("name"),
        options=split_options(options) if options is not None else None,
        default=default,
    )


class PlaceholderParser:
    """Discovers placeholders in template text without modifying it."""

    def tokenize(self, text: str) -> list[Token]:
        """Split a template into literal and placeholder tokens, left to right.

        Args:
            text: Raw template text.

        Returns:
            Tokens whose source texts concatenate back to ``text``.
        """
        tokens: list[Token] = []
        position = 0

        for match in PLACEHOLDER_REGEX.finditer(text):
            if match.start() > position:
                tokens.append(Token(TokenKind.LITERAL, text[position:match.start()]))

            if match.group("argument") is not None:
                tokens.append(Token(TokenKind.ARGUMENT, match.group(0), spec_from_match(match)))
            elif match.group("clipboard") is not None:
                tokens.append(Token(TokenKind.CLIPBOARD, match.group(0)))
            else:
                tokens.append(Token(TokenKind.CURSOR, match.group(0)))

            position = match.end()

        if position < len(text):
            tokens.append(Token(TokenKind.LITERAL, text[position:]))

        return tokens

    def extract_arguments(self, text: str) -> list[ArgumentSpec]:
        """Return one ArgumentSpec per argument placeholder, in order of appearance.

        Duplicate names are not collapsed; every occurrence yields an entry.
        Malformed placeholders (e.g. ``{argument}``) are ignored.

        Args:
            text: Raw template text.

        Returns:
            The discovered argument specs.
        """
        specs = [
            token.spec
            for token in self.tokenize(text)
            if token.kind is TokenKind.ARGUMENT and token.spec is not None
        ]
        logger.debug(f"Extracted {len(specs)} argument placeholder(s)")
        return specs


_default_parser = PlaceholderParser()


def extract_arguments(text: str) -> list[ArgumentSpec]:
    """Module-level shortcut for ``PlaceholderParser().extract_arguments``."""
    return _default_parser.extract_arguments(text)
