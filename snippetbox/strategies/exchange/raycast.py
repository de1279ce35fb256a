"""Snippet import/export in the Raycast JSON format.

The exchanged document is a JSON array of objects with exactly the
fields ``keyword``, ``name`` and ``text``:

    [
      {"keyword": "email", "name": "My Email", "text": "hello@example.com"}
    ]

Imports are all-or-nothing: one bad entry rejects the whole batch.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class ExchangedSnippet(BaseModel):
    """One snippet as it appears in an import/export document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    keyword: StrictStr = Field(min_length=1)
    name: StrictStr = Field(min_length=1)
    text: StrictStr = Field(min_length=1)


_BATCH_ADAPTER = TypeAdapter(list[ExchangedSnippet])


class ImportValidationError(ValueError):
    """Raised when an import document is rejected.

    Attributes:
        errors: One human-readable message per problem found.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Invalid snippet import: " + "; ".join(errors))


def _describe(error: dict[str, Any]) -> str:
    location = error.get("loc", ())
    if not location:
        if error.get("type") == "json_invalid":
            return f"invalid JSON: {error.get('ctx', {}).get('error', error.get('msg'))}"
        return "expected a JSON array of snippets"

    index, *fields = location
    if not fields:
        return f"entry {index}: expected an object with keyword, name and text"

    field = ".".join(str(part) for part in fields)
    if error.get("type") == "missing":
        return f"entry {index}: missing field '{field}'"
    return f"entry {index}: field '{field}' {error.get('msg', 'is invalid').lower()}"


def _reject(exc: ValidationError) -> ImportValidationError:
    messages = [_describe(error) for error in exc.errors()]
    logger.warning(f"Rejected snippet import with {len(messages)} problem(s): {messages}")
    return ImportValidationError(messages)


def validate_import(payload: Any) -> list[ExchangedSnippet]:
    """Validate an already-decoded import document.

    Args:
        payload: Decoded JSON value.

    Returns:
        The validated entries, in document order.

    Raises:
        ImportValidationError: If the payload is not an array or any entry is
            missing ``keyword``, ``name`` or ``text`` (or has a non-string or
            empty value for one of them).
    """
    try:
        return _BATCH_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise _reject(e) from e


def parse_import(raw: str | bytes) -> list[ExchangedSnippet]:
    """Decode and validate a raw JSON import document.

    Raises:
        ImportValidationError: If the document is not valid JSON or fails
            validate_import.
    """
    try:
        return _BATCH_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise _reject(e) from e


def export_snippets(records: Iterable[Any]) -> list[ExchangedSnippet]:
    """Project stored snippets onto the exchanged fields.

    ``id``, ``active`` and timestamps are dropped.
    """
    return [
        ExchangedSnippet(keyword=record.keyword, name=record.name, text=record.text)
        for record in records
    ]


def dump_export(records: Iterable[Any]) -> str:
    """Serialize snippets as an indented JSON export document."""
    return json.dumps(
        [entry.model_dump() for entry in export_snippets(records)],
        indent=2,
        ensure_ascii=False,
    )
