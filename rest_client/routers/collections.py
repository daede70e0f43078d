"""
Collection management API routes.

Provides CRUD operations for collections, adding and removing saved
requests by position, and executing a saved request against the active
environment.
"""

from typing import Union

import httpx
from fastapi import APIRouter, Depends, status

from ..config import Settings
from ..dependencies import (
    get_collection_store,
    get_environment_store,
    get_history_store,
    get_http_client,
    get_settings,
)
from ..exceptions import ErrorResponse
from ..schemas.collection import Collection, CollectionCreate, CollectionUpdate
from ..schemas.execute import ExecuteErrorResponse, ExecuteResponse
from ..schemas.request import RequestDraft
from ..services.collection_store import CollectionStore
from ..services.environment_store import EnvironmentStore
from ..services.history_store import HistoryStore
from ..services.http_executor import execute_request
from ..services.variable_substitution import substitute_draft
from .execute import result_response


router = APIRouter(prefix="/api/collections", tags=["collections"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Collection or request not found"}}


@router.get("", response_model=list[Collection])
def list_collections(store: CollectionStore = Depends(get_collection_store)):
    """List all collections with their saved requests."""
    return store.list()


@router.post("", response_model=Collection, status_code=status.HTTP_201_CREATED)
def create_collection(
    collection_data: CollectionCreate,
    store: CollectionStore = Depends(get_collection_store),
):
    """Create an empty collection."""
    return store.create(collection_data.name)


@router.get("/{collection_id}", response_model=Collection, responses=NOT_FOUND)
def get_collection(collection_id: str, store: CollectionStore = Depends(get_collection_store)):
    return store.get(collection_id)


@router.put("/{collection_id}", response_model=Collection, responses=NOT_FOUND)
def update_collection(
    collection_id: str,
    collection_data: CollectionUpdate,
    store: CollectionStore = Depends(get_collection_store),
):
    """Rename a collection."""
    return store.update(collection_id, collection_data.name)


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
def delete_collection(collection_id: str, store: CollectionStore = Depends(get_collection_store)):
    store.delete(collection_id)
    return None


@router.post(
    "/{collection_id}/requests",
    response_model=Collection,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
def add_request_to_collection(
    collection_id: str,
    draft: RequestDraft,
    store: CollectionStore = Depends(get_collection_store),
):
    """
    Save a request draft at the end of a collection.

    A draft without a name is saved as "METHOD URL".
    """
    return store.add_request(collection_id, draft)


@router.delete(
    "/{collection_id}/requests/{request_index}",
    response_model=Collection,
    responses=NOT_FOUND,
)
def remove_request_from_collection(
    collection_id: str,
    request_index: int,
    store: CollectionStore = Depends(get_collection_store),
):
    """Remove the saved request at the given position."""
    return store.remove_request(collection_id, request_index)


@router.post(
    "/{collection_id}/requests/{request_index}/execute",
    response_model=Union[ExecuteResponse, ExecuteErrorResponse],
    responses={
        **NOT_FOUND,
        500: {"model": ExecuteErrorResponse, "description": "Network failure"},
    },
)
async def execute_saved_request(
    collection_id: str,
    request_index: int,
    store: CollectionStore = Depends(get_collection_store),
    environments: EnvironmentStore = Depends(get_environment_store),
    history: HistoryStore = Depends(get_history_store),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """
    Execute a saved request.

    The active environment's variables are substituted into the URL, body
    and headers before sending. The attempt is recorded in history.
    """
    draft = store.get_request(collection_id, request_index)
    draft = substitute_draft(draft, environments.active_variables())

    result = await execute_request(
        draft=draft,
        client=client,
        store=history,
        timeout=settings.REQUEST_TIMEOUT,
    )
    return result_response(result)
