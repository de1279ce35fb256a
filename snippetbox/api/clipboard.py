"""Clipboard API routes.

Delivers produced snippet text to the clipboard bridge.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from snippetbox.api.deps import get_executor
from snippetbox.api.schemas import ClipboardWriteRequest, ClipboardWriteResponse, ErrorResponse
from snippetbox.interfaces.clipboard import ClipboardError
from snippetbox.strategies.template_engine import SnippetExecutor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clipboard", tags=["clipboard"])


@router.post(
    "/copy",
    response_model=ClipboardWriteResponse,
    responses={502: {"model": ErrorResponse}},
)
async def copy_to_clipboard(
    request: ClipboardWriteRequest,
    executor: SnippetExecutor = Depends(get_executor),
) -> ClipboardWriteResponse | JSONResponse:
    """Write text to the clipboard.

    On failure the text is echoed back in ``extra.text`` so the caller
    can offer it for manual copying.

    Args:
        request: The text to copy.
        executor: The snippet executor holding the clipboard bridge.

    Returns:
        Acknowledgement, or a 502 ErrorResponse.
    """
    try:
        await executor.copy(request.text)
    except ClipboardError as e:
        logger.error(f"Clipboard write failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=ErrorResponse(
                detail=str(e),
                error_code="CLIPBOARD_WRITE_FAILED",
                extra={"text": request.text},
            ).model_dump(),
        )

    return ClipboardWriteResponse(copied=True, length=len(request.text))
