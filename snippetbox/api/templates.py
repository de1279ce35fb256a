"""Template API routes.

Parses and executes ad-hoc template text that is not (yet) stored,
e.g. while a snippet is being edited.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from snippetbox.api.deps import get_executor
from snippetbox.api.schemas import ExecuteRequest, ExecuteResponse, ParseRequest, ParseResponse
from snippetbox.strategies.template_engine import SnippetExecutor, extract_arguments

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.post("/parse", response_model=ParseResponse)
async def parse_template(request: ParseRequest) -> ParseResponse:
    """Discover the argument placeholders of a template.

    Malformed placeholders are treated as text and not reported.

    Args:
        request: The template text.

    Returns:
        One entry per argument placeholder, in order of appearance.
    """
    arguments = extract_arguments(request.text)
    logger.info(f"Parsed template: {len(arguments)} argument placeholder(s)")
    return ParseResponse(arguments=arguments)


@router.post("/execute", response_model=ExecuteResponse)
async def execute_template(
    request: ExecuteRequest,
    executor: SnippetExecutor = Depends(get_executor),
) -> ExecuteResponse:
    """Execute template text with the supplied argument values.

    Args:
        request: Template text and argument values.
        executor: The snippet executor.

    Returns:
        The final text and cursor offset.

    Raises:
        HTTPException: If no template text was given.
    """
    if request.text is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Template text is required",
        )

    outcome = await executor.execute(request.text, request.values)
    return ExecuteResponse(result=outcome.result, cursor_index=outcome.cursor_index)
