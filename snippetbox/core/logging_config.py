"""Centralized logging configuration for the application.

Provides logging with separate files for:
- info.log: General application logs (INFO level and above)
- error.log: Error logs only (ERROR level and above)

and an in-memory ring buffer of recent records served by GET /logs.
"""

import logging
import sys
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from snippetbox.core.config import Settings

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RESERVED_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_PLAIN_TYPES = (str, int, float, bool, type(None))

# Short level names accepted by entries().
_LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


@dataclass(frozen=True)
class LogEntry:
    """A single captured log record.

    Attributes:
        level: Lower-case level name (debug, info, warning, error, critical).
        message: The formatted log message.
        timestamp: ISO-8601 UTC timestamp of the record.
        logger: Name of the emitting logger.
        context: Values passed through ``extra=``.
    """

    level: str
    message: str
    timestamp: str
    logger: str
    context: dict[str, Any] = field(default_factory=dict)


class RecentLogBuffer(logging.Handler):
    """Logging handler that keeps the last ``capacity`` records in memory."""

    def __init__(self, capacity: int = 1000, level: int = logging.DEBUG) -> None:
        super().__init__(level=level)
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._entries_lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def emit(self, record: logging.LogRecord) -> None:
        try:
            context = {
                key: value if isinstance(value, _PLAIN_TYPES) else repr(value)
                for key, value in vars(record).items()
                if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_")
            }
            entry = LogEntry(
                level=record.levelname.lower(),
                message=record.getMessage(),
                timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                logger=record.name,
                context=context,
            )
            with self._entries_lock:
                self._entries.append(entry)
        except Exception:
            self.handleError(record)

    def entries(self, level: str | None = None) -> list[LogEntry]:
        """Return a snapshot of buffered entries, oldest first.

        Args:
            level: Optional level name to filter on (case-insensitive).
                ``warn`` is accepted for ``warning``.
        """
        with self._entries_lock:
            snapshot = list(self._entries)
        if level is None:
            return snapshot
        wanted = _LEVEL_ALIASES.get(level.lower(), level.lower())
        return [entry for entry in snapshot if entry.level == wanted]

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def setup_logging(
    settings: Settings,
    log_buffer: RecentLogBuffer | None = None,
) -> logging.Logger:
    """Configure application logging with file and console handlers.

    Creates separate log files for info and error levels inside
    ``settings.log_dir``.

    Args:
        settings: Application settings.
        log_buffer: Optional in-memory buffer to attach to the root logger.

    Returns:
        The configured root logger.
    """
    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    info_log_path = log_dir / "info.log"
    error_log_path = log_dir / "error.log"

    # Create formatters
    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    simple_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    level = logging.DEBUG if settings.log_level == "DEBUG" else logging.INFO

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # File handler for INFO and above (info.log)
    info_handler = logging.FileHandler(info_log_path, encoding="utf-8")
    info_handler.setLevel(logging.INFO)
    info_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(info_handler)

    # File handler for ERROR and above (error.log)
    error_handler = logging.FileHandler(error_log_path, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_handler)

    # Console handler for development
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_buffer is not None:
        log_buffer.setLevel(level)
        root_logger.addHandler(log_buffer)

    return root_logger

