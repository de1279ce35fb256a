"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CLIPBOARD_BACKENDS = ("system", "memory")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./snippets.db",
        description="Async SQLAlchemy URL for the snippet store.",
    )

    # Clipboard
    clipboard_backend: str = Field(
        default="system",
        description="Clipboard bridge to use: 'system' (pyperclip) or 'memory'.",
    )

    # Auto-expansion
    auto_expansion_enabled: bool = Field(
        default=False,
        description="Whether keyword auto-expansion starts enabled.",
    )
    expansion_buffer_size: int = Field(
        default=100,
        ge=1,
        description="Maximum number of typed characters kept by the keystroke matcher.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )
    log_buffer_size: int = Field(
        default=1000,
        ge=1,
        description="Number of recent log records kept in memory for GET /logs.",
    )

    @field_validator("clipboard_backend")
    @classmethod
    def validate_clipboard_backend(cls, v: str) -> str:
        """Reject unknown clipboard backends early."""
        v = v.lower()
        if v not in CLIPBOARD_BACKENDS:
            raise ValueError(
                f"Unknown clipboard backend '{v}'. "
                f"Expected one of: {', '.join(CLIPBOARD_BACKENDS)}"
            )
        return v

    @field_validator("log_dir")
    @classmethod
    def ensure_log_dir(cls, v: Path) -> Path:
        """Ensure log directory exists."""
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    def configure_logging(self) -> None:
        """Configure structlog to render through the stdlib logging tree."""
        import structlog

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logger.setLevel(getattr(logging, self.log_level, logging.INFO))


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the Settings instance.

    Returns:
        The cached Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
