"""
History record API routes.

Provides endpoints for browsing and pruning request execution history.
History records are created automatically when requests are executed.
"""

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_history_store
from ..exceptions import ErrorResponse, ResourceNotFoundError, ValidationError
from ..schemas.history import DeleteResponse, HistoryItem, HistoryListResponse
from ..services.history_store import HistoryStore


router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=HistoryListResponse)
def list_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: str | None = None,
    method: str | None = None,
    store: HistoryStore = Depends(get_history_store),
):
    """
    Get one page of history records, newest first.

    Args:
        page: 1-based page number
        limit: Number of records per page
        search: Case-sensitive substring matched against url or name
        method: Exact HTTP method filter
        store: History store

    Returns:
        HistoryListResponse with the page, total count and page count
    """
    result = store.list(
        search=search or None,
        method=method or None,
        page=page,
        page_size=limit,
    )
    return HistoryListResponse(
        data=result.items,
        total=result.total,
        page=result.page,
        limit=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{history_id}", response_model=HistoryItem, responses={404: {"model": ErrorResponse}})
def get_history(history_id: int, store: HistoryStore = Depends(get_history_store)):
    """
    Get a single history record by ID.

    Raises:
        ResourceNotFoundError: 404 if history record not found
    """
    return store.get(history_id)


@router.delete(
    "",
    response_model=DeleteResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_history(
    id: int | None = None,
    store: HistoryStore = Depends(get_history_store),
):
    """
    Delete a single history record by ID.

    Args:
        id: The unique identifier of the history record to delete
        store: History store

    Raises:
        ValidationError: 400 if id is missing
        ResourceNotFoundError: 404 if history record not found
    """
    if id is None:
        raise ValidationError("ID is required")

    if not store.delete_by_id(id):
        raise ResourceNotFoundError("History item", id)
    return DeleteResponse(success=True)
