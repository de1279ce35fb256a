"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from snippetbox.db.models import SnippetRead
from snippetbox.strategies.exchange import ExchangedSnippet
from snippetbox.strategies.template_engine import ArgumentSpec


# =============================================================================
# Snippet Schemas
# =============================================================================


class SnippetListResponse(BaseModel):
    """Response for listing snippets."""

    snippets: list[SnippetRead]
    total: int


# =============================================================================
# Template Schemas
# =============================================================================


class ParseRequest(BaseModel):
    """Request to discover the argument placeholders of a template."""

    text: str = Field(description="Raw template text")


class ParseResponse(BaseModel):
    """Argument placeholders in order of appearance."""

    arguments: list[ArgumentSpec]


class ExecuteRequest(BaseModel):
    """Request to execute a snippet template."""

    text: str | None = Field(
        default=None,
        description="Raw template text; ignored when executing a stored snippet",
    )
    values: dict[str, str] = Field(
        default_factory=dict,
        description="Argument values keyed by argument name",
    )


class ExecuteResponse(BaseModel):
    """Final snippet text and cursor position."""

    result: str
    cursor_index: int | None = None


# =============================================================================
# Import/Export Schemas
# =============================================================================


class ImportPreviewResponse(BaseModel):
    """Validated import entries, not yet stored."""

    snippets: list[ExchangedSnippet]
    total: int


class ImportResponse(BaseModel):
    """Result of a successful import."""

    imported: int
    snippets: list[SnippetRead]


# =============================================================================
# Clipboard Schemas
# =============================================================================


class ClipboardWriteRequest(BaseModel):
    """Request to put produced text on the clipboard."""

    text: str


class ClipboardWriteResponse(BaseModel):
    """Clipboard write acknowledgement."""

    copied: bool = True
    length: int


# =============================================================================
# Auto-expansion Schemas
# =============================================================================


class ExpansionStatusResponse(BaseModel):
    """Auto-expansion state."""

    enabled: bool
    keywords: list[str]


class KeyPressRequest(BaseModel):
    """Key presses reported by the host keyboard hook, in order."""

    keys: list[str] = Field(description="Single characters or named keys (space, enter, tab, backspace)")


class ExpansionOutcome(BaseModel):
    """An executed keyword expansion for the host to type."""

    keyword: str
    backspaces: int
    result: str
    cursor_index: int | None = None


class KeyPressResponse(BaseModel):
    """Expansions triggered by a batch of key presses."""

    expansions: list[ExpansionOutcome]


# =============================================================================
# Log Schemas
# =============================================================================


class LogEntryResponse(BaseModel):
    """A captured log record."""

    level: str
    message: str
    timestamp: str
    logger: str
    context: dict[str, Any] = Field(default_factory=dict)


class LogListResponse(BaseModel):
    """Recent log records, oldest first."""

    entries: list[LogEntryResponse]
    total: int
    capacity: int


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")
