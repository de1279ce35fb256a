"""Template engine domain models.

Pydantic models for placeholder parsing and snippet execution.
Kept separate from the API layer to avoid circular imports.
"""

from pydantic import BaseModel, ConfigDict, Field


class ArgumentSpec(BaseModel):
    """An ``{argument ...}`` placeholder discovered in a template."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Argument name, verbatim")
    options: tuple[str, ...] | None = Field(
        default=None,
        description="Choices from options=\"...\", split on ',' and trimmed",
    )
    default: str | None = Field(
        default=None,
        description="Value from default=\"...\", verbatim",
    )


class ExecutionResult(BaseModel):
    """Final text of an executed snippet."""

    model_config = ConfigDict(frozen=True)

    result: str = Field(description="Fully substituted text")
    cursor_index: int | None = Field(
        default=None,
        ge=0,
        description="Offset of the first {cursor} in the result, if any",
    )
