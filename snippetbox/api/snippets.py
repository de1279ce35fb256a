"""Snippet management API routes.

Handles CRUD and search over stored snippets, JSON import/export, and
argument discovery / execution of a stored snippet's template.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, Response

from snippetbox.api.deps import get_auto_expander, get_executor, get_repository
from snippetbox.api.expansion import sync_keyword_map
from snippetbox.api.schemas import (
    ErrorResponse,
    ExecuteRequest,
    ExecuteResponse,
    ImportPreviewResponse,
    ImportResponse,
    ParseResponse,
    SnippetListResponse,
)
from snippetbox.db.models import Snippet, SnippetCreate, SnippetRead, SnippetUpdate
from snippetbox.db.repository import SnippetRepository
from snippetbox.interfaces.snippet_store import SnippetStoreError
from snippetbox.strategies.expansion import AutoExpander
from snippetbox.strategies.exchange import ImportValidationError, dump_export, parse_import
from snippetbox.strategies.template_engine import SnippetExecutor, extract_arguments

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/snippets", tags=["snippets"])


# =============================================================================
# Helper Functions
# =============================================================================


def _store_failure(e: SnippetStoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e),
    )


def _import_rejected(e: ImportValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            detail="Import rejected; no snippets were created",
            error_code="IMPORT_VALIDATION_FAILED",
            extra={"errors": e.errors},
        ).model_dump(),
    )


async def _refresh_keywords(repository: SnippetRepository, expander: AutoExpander) -> None:
    try:
        await sync_keyword_map(repository, expander)
    except SnippetStoreError as e:
        raise _store_failure(e) from e


async def _get_or_404(repository: SnippetRepository, snippet_id: int) -> Snippet:
    try:
        snippet = await repository.get(snippet_id)
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    if snippet is None:
        logger.warning(f"Snippet not found: {snippet_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Snippet not found",
        )
    return snippet


# =============================================================================
# Import / Export
# =============================================================================


@router.get("/export")
async def export_snippets(
    repository: SnippetRepository = Depends(get_repository),
) -> Response:
    """Export all snippets as a JSON array of {keyword, name, text}.

    Returns:
        The export document, ``id``, ``active`` and timestamps excluded.
    """
    try:
        snippets = await repository.list()
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    logger.info(f"Exporting {len(snippets)} snippet(s)")
    return Response(
        content=dump_export(snippets),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="snippets.json"'},
    )


@router.post(
    "/import/preview",
    response_model=ImportPreviewResponse,
    responses={422: {"model": ErrorResponse}},
)
async def preview_import(request: Request) -> ImportPreviewResponse | JSONResponse:
    """Validate an import document without storing anything.

    Args:
        request: Request whose body is the raw JSON import document.

    Returns:
        The validated entries, or a 422 ErrorResponse listing the problems.
    """
    try:
        entries = parse_import(await request.body())
    except ImportValidationError as e:
        return _import_rejected(e)

    return ImportPreviewResponse(snippets=entries, total=len(entries))


@router.post(
    "/import",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def import_snippets(
    request: Request,
    repository: SnippetRepository = Depends(get_repository),
    expander: AutoExpander = Depends(get_auto_expander),
) -> ImportResponse | JSONResponse:
    """Import snippets from a JSON array of {keyword, name, text}.

    The whole batch is validated before anything is written, and stored in
    a single transaction: either every entry is created or none is.

    Args:
        request: Request whose body is the raw JSON import document.
        repository: Snippet store.
        expander: Auto-expander whose keyword map is refreshed.

    Returns:
        The created snippets, or a 422 ErrorResponse listing the problems.
    """
    try:
        entries = parse_import(await request.body())
    except ImportValidationError as e:
        return _import_rejected(e)

    try:
        created = await repository.bulk_create(entries)
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    await _refresh_keywords(repository, expander)

    logger.info(f"Imported {len(created)} snippet(s)")
    return ImportResponse(
        imported=len(created),
        snippets=[SnippetRead.model_validate(snippet) for snippet in created],
    )


# =============================================================================
# CRUD
# =============================================================================


@router.post("", response_model=SnippetRead, status_code=status.HTTP_201_CREATED)
async def create_snippet(
    snippet_data: SnippetCreate,
    repository: SnippetRepository = Depends(get_repository),
    expander: AutoExpander = Depends(get_auto_expander),
) -> SnippetRead:
    """Create a new snippet.

    Args:
        snippet_data: Snippet creation data.
        repository: Snippet store.
        expander: Auto-expander whose keyword map is refreshed.

    Returns:
        The created snippet.
    """
    try:
        snippet = await repository.create(snippet_data)
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    await _refresh_keywords(repository, expander)

    return SnippetRead.model_validate(snippet)


@router.get("", response_model=SnippetListResponse)
async def list_snippets(
    search: str | None = Query(default=None, description="Substring of keyword or name"),
    active_only: bool = Query(default=False),
    repository: SnippetRepository = Depends(get_repository),
) -> SnippetListResponse:
    """List snippets, most recently updated first.

    Args:
        search: Case-insensitive substring matched against keyword or name.
        active_only: Only include active snippets.
        repository: Snippet store.

    Returns:
        Matching snippets and their count.
    """
    try:
        snippets = await repository.list(search=search, active_only=active_only)
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    logger.info(f"Listed {len(snippets)} snippet(s) (search={search!r}, active_only={active_only})")
    return SnippetListResponse(
        snippets=[SnippetRead.model_validate(snippet) for snippet in snippets],
        total=len(snippets),
    )


@router.get("/{snippet_id}", response_model=SnippetRead)
async def get_snippet(
    snippet_id: int,
    repository: SnippetRepository = Depends(get_repository),
) -> SnippetRead:
    """Get a specific snippet by ID.

    Raises:
        HTTPException: If the snippet is not found.
    """
    snippet = await _get_or_404(repository, snippet_id)
    return SnippetRead.model_validate(snippet)


@router.patch("/{snippet_id}", response_model=SnippetRead)
async def update_snippet(
    snippet_id: int,
    patch: SnippetUpdate,
    repository: SnippetRepository = Depends(get_repository),
    expander: AutoExpander = Depends(get_auto_expander),
) -> SnippetRead:
    """Update some fields of a snippet.

    Args:
        snippet_id: The snippet ID.
        patch: Fields to change; omitted fields keep their values.
        repository: Snippet store.
        expander: Auto-expander whose keyword map is refreshed.

    Returns:
        The updated snippet.

    Raises:
        HTTPException: If the snippet is not found.
    """
    try:
        snippet = await repository.update(snippet_id, patch)
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    if snippet is None:
        logger.warning(f"Snippet not found for update: {snippet_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Snippet not found",
        )

    await _refresh_keywords(repository, expander)
    return SnippetRead.model_validate(snippet)


@router.delete("/{snippet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_snippet(
    snippet_id: int,
    repository: SnippetRepository = Depends(get_repository),
    expander: AutoExpander = Depends(get_auto_expander),
) -> None:
    """Delete a snippet.

    Raises:
        HTTPException: If the snippet is not found.
    """
    try:
        deleted = await repository.delete(snippet_id)
    except SnippetStoreError as e:
        raise _store_failure(e) from e

    if not deleted:
        logger.warning(f"Snippet not found for deletion: {snippet_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Snippet not found",
        )

    await _refresh_keywords(repository, expander)


# =============================================================================
# Template Operations on Stored Snippets
# =============================================================================


@router.get("/{snippet_id}/arguments", response_model=ParseResponse)
async def get_snippet_arguments(
    snippet_id: int,
    repository: SnippetRepository = Depends(get_repository),
) -> ParseResponse:
    """List the argument placeholders of a stored snippet, for building a form."""
    snippet = await _get_or_404(repository, snippet_id)
    return ParseResponse(arguments=extract_arguments(snippet.text))


@router.post("/{snippet_id}/execute", response_model=ExecuteResponse)
async def execute_snippet(
    snippet_id: int,
    request: ExecuteRequest,
    repository: SnippetRepository = Depends(get_repository),
    executor: SnippetExecutor = Depends(get_executor),
) -> ExecuteResponse:
    """Execute a stored snippet with the supplied argument values.

    ``request.text`` is ignored; the stored template is used.

    Returns:
        The final text and cursor offset.
    """
    snippet = await _get_or_404(repository, snippet_id)

    logger.info(f"Executing snippet {snippet_id} ({snippet.keyword!r})")
    outcome = await executor.execute(snippet.text, request.values)
    return ExecuteResponse(result=outcome.result, cursor_index=outcome.cursor_index)
