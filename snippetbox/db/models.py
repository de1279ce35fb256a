"""Database models using SQLModel.

Defines the snippet record and its API-facing variants:
- Snippet: table model
- SnippetCreate / SnippetUpdate: request models
- SnippetRead: response model
"""

import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# =============================================================================
# Shared Models (for API requests/responses, not database tables)
# =============================================================================


class SnippetBase(SQLModel):
    """Base snippet fields."""

    keyword: str = Field(min_length=1, max_length=255, index=True)
    name: str = Field(min_length=1, max_length=255)
    text: str = Field(min_length=1)
    active: bool = Field(default=True)


# =============================================================================
# Database Models
# =============================================================================


class Snippet(SnippetBase, table=True):
    """A stored text template, triggered by its keyword."""

    __tablename__ = "snippets"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime.datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime.datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )


# =============================================================================
# Request/Response Models
# =============================================================================


class SnippetCreate(SnippetBase):
    """Snippet creation model."""


class SnippetUpdate(SQLModel):
    """Partial update; omitted fields are left unchanged."""

    keyword: str | None = Field(default=None, min_length=1, max_length=255)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    text: str | None = Field(default=None, min_length=1)
    active: bool | None = None


class SnippetRead(SnippetBase):
    """Snippet response model."""

    id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime
