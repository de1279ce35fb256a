"""Recent log API routes."""

import dataclasses
import logging

from fastapi import APIRouter, Depends, Query, status

from snippetbox.api.deps import get_log_buffer
from snippetbox.api.schemas import LogEntryResponse, LogListResponse
from snippetbox.core.logging_config import RecentLogBuffer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("", response_model=LogListResponse)
async def list_logs(
    level: str | None = Query(default=None, description="Only entries of this level"),
    log_buffer: RecentLogBuffer = Depends(get_log_buffer),
) -> LogListResponse:
    """Return the most recent log records, oldest first."""
    entries = log_buffer.entries(level)
    return LogListResponse(
        entries=[LogEntryResponse(**dataclasses.asdict(entry)) for entry in entries],
        total=len(entries),
        capacity=log_buffer.capacity,
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_logs(
    log_buffer: RecentLogBuffer = Depends(get_log_buffer),
) -> None:
    """Discard all buffered log records."""
    logger.info(f"Clearing {len(log_buffer)} buffered log record(s)")
    log_buffer.clear()
