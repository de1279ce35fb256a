"""Snippet import/export strategies."""

from snippetbox.strategies.exchange.raycast import (
    ExchangedSnippet,
    ImportValidationError,
    dump_export,
    export_snippets,
    parse_import,
    validate_import,
)

__all__ = [
    "ExchangedSnippet",
    "ImportValidationError",
    "dump_export",
    "export_snippets",
    "parse_import",
    "validate_import",
]
