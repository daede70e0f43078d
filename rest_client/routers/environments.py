"""
Environment management API routes.

Provides CRUD operations for environments, wholesale replacement of their
variables and selection of the active environment used for substitution.
"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_environment_store
from ..exceptions import ErrorResponse
from ..schemas.environment import (
    ActiveEnvironmentResponse,
    ActiveEnvironmentUpdate,
    Environment,
    EnvironmentCreate,
    EnvironmentUpdate,
    VariablesUpdate,
)
from ..services.environment_store import EnvironmentStore


router = APIRouter(prefix="/api/environments", tags=["environments"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Environment not found"}}


def _active_response(store: EnvironmentStore) -> ActiveEnvironmentResponse:
    document = store.load()
    environment = store.active_environment()
    return ActiveEnvironmentResponse(
        active_env_id=document.active_env_id,
        environment=environment,
        variables=dict(environment.variables) if environment else {},
    )


@router.get("", response_model=list[Environment])
def list_environments(store: EnvironmentStore = Depends(get_environment_store)):
    """List all environments with their variables."""
    return store.list()


@router.post("", response_model=Environment, status_code=status.HTTP_201_CREATED)
def create_environment(
    environment_data: EnvironmentCreate,
    store: EnvironmentStore = Depends(get_environment_store),
):
    """Create a new environment with optional initial variables."""
    return store.create(environment_data.name, environment_data.variables)


# Declared before /{environment_id} so "active" is not read as an id
@router.get("/active", response_model=ActiveEnvironmentResponse)
def get_active_environment(store: EnvironmentStore = Depends(get_environment_store)):
    """
    Get the active environment and the variables it provides.

    A selection pointing at a deleted environment yields no environment and
    an empty variable mapping.
    """
    return _active_response(store)


@router.put("/active", response_model=ActiveEnvironmentResponse, responses=NOT_FOUND)
def set_active_environment(
    selection: ActiveEnvironmentUpdate,
    store: EnvironmentStore = Depends(get_environment_store),
):
    """Select the active environment, or clear the selection with null."""
    store.set_active(selection.environment_id)
    return _active_response(store)


@router.get("/{environment_id}", response_model=Environment, responses=NOT_FOUND)
def get_environment(environment_id: str, store: EnvironmentStore = Depends(get_environment_store)):
    return store.get(environment_id)


@router.put("/{environment_id}", response_model=Environment, responses=NOT_FOUND)
def update_environment(
    environment_id: str,
    environment_data: EnvironmentUpdate,
    store: EnvironmentStore = Depends(get_environment_store),
):
    """Rename an environment."""
    return store.update(environment_id, environment_data.name)


@router.put("/{environment_id}/variables", response_model=Environment, responses=NOT_FOUND)
def replace_variables(
    environment_id: str,
    variables_data: VariablesUpdate,
    store: EnvironmentStore = Depends(get_environment_store),
):
    """Replace all variables of an environment."""
    return store.set_variables(environment_id, variables_data.variables)


@router.delete("/{environment_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
def delete_environment(environment_id: str, store: EnvironmentStore = Depends(get_environment_store)):
    """
    Delete an environment by ID.

    If it was the active environment, the selection is cleared.
    """
    store.delete(environment_id)
    return None
