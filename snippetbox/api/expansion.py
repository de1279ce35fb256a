"""Keyword auto-expansion API routes.

The host's keyboard hook reports key presses here; expansions come back
already executed so the host only has to erase the keyword and type.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from snippetbox.api.deps import get_auto_expander, get_executor, get_repository
from snippetbox.api.schemas import (
    ExpansionOutcome,
    ExpansionStatusResponse,
    KeyPressRequest,
    KeyPressResponse,
)
from snippetbox.db.repository import SnippetRepository
from snippetbox.interfaces.snippet_store import SnippetStoreError
from snippetbox.strategies.expansion import AutoExpander
from snippetbox.strategies.template_engine import SnippetExecutor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expansion", tags=["expansion"])


def _status(expander: AutoExpander) -> ExpansionStatusResponse:
    return ExpansionStatusResponse(
        enabled=expander.enabled,
        keywords=expander.keyword_map.keywords(),
    )


async def sync_keyword_map(repository: SnippetRepository, expander: AutoExpander) -> int:
    """Load every active snippet's keyword into the expander.

    Returns:
        Number of distinct keywords loaded.
    """
    snippets = await repository.list(active_only=True)
    # list() is newest first; reversed so the most recent snippet wins a shared keyword.
    expander.keyword_map.update(
        (snippet.keyword, snippet.text) for snippet in reversed(snippets)
    )
    return len(expander.keyword_map)


@router.get("", response_model=ExpansionStatusResponse)
async def get_expansion_status(
    expander: AutoExpander = Depends(get_auto_expander),
) -> ExpansionStatusResponse:
    """Report whether auto-expansion is on and which keywords are armed."""
    return _status(expander)


@router.post("/enable", response_model=ExpansionStatusResponse)
async def enable_expansion(
    expander: AutoExpander = Depends(get_auto_expander),
) -> ExpansionStatusResponse:
    """Turn auto-expansion on."""
    expander.enable()
    return _status(expander)


@router.post("/disable", response_model=ExpansionStatusResponse)
async def disable_expansion(
    expander: AutoExpander = Depends(get_auto_expander),
) -> ExpansionStatusResponse:
    """Turn auto-expansion off and forget any partially typed keyword."""
    expander.disable()
    return _status(expander)


@router.post("/sync", response_model=ExpansionStatusResponse)
async def sync_expansion(
    repository: SnippetRepository = Depends(get_repository),
    expander: AutoExpander = Depends(get_auto_expander),
) -> ExpansionStatusResponse:
    """Reload the keyword map from the active snippets in the store."""
    try:
        count = await sync_keyword_map(repository, expander)
    except SnippetStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    logger.info(f"Keyword map synced: {count} keyword(s)")
    return _status(expander)


@router.post("/keys", response_model=KeyPressResponse)
async def feed_keys(
    request: KeyPressRequest,
    expander: AutoExpander = Depends(get_auto_expander),
    executor: SnippetExecutor = Depends(get_executor),
) -> KeyPressResponse:
    """Feed key presses and execute every keyword they complete.

    Expanded templates run with no argument values, so arguments take
    their defaults.

    Args:
        request: Key presses in the order they were typed.
        expander: The auto-expander.
        executor: The snippet executor.

    Returns:
        One executed expansion per keyword hit, in order.
    """
    outcomes: list[ExpansionOutcome] = []

    for expansion in expander.feed_many(request.keys):
        executed = await executor.execute(expansion.text, {})
        outcomes.append(
            ExpansionOutcome(
                keyword=expansion.keyword,
                backspaces=expansion.backspaces,
                result=executed.result,
                cursor_index=executed.cursor_index,
            )
        )

    return KeyPressResponse(expansions=outcomes)
