"""
Pydantic schemas for environments and the environments document.
"""

from pydantic import BaseModel, Field

from .base import CamelModel


class Environment(BaseModel):
    """A named set of substitution variables."""
    id: str
    name: str
    variables: dict[str, str] = {}


class EnvironmentsDocument(CamelModel):
    """
    Persisted environments document.

    ``active_env_id`` may reference an environment that no longer exists;
    that is read as "no active environment".
    """
    environments: list[Environment] = []
    active_env_id: str | None = None


class EnvironmentCreate(BaseModel):
    """Schema for creating a new environment."""
    name: str = Field(min_length=1)
    variables: dict[str, str] = {}


class EnvironmentUpdate(BaseModel):
    """Schema for renaming an environment."""
    name: str = Field(min_length=1)


class VariablesUpdate(BaseModel):
    """Replaces an environment's variables wholesale."""
    variables: dict[str, str]


class ActiveEnvironmentUpdate(CamelModel):
    """Selects the active environment; ``None`` clears the selection."""
    environment_id: str | None = None


class ActiveEnvironmentResponse(CamelModel):
    active_env_id: str | None
    environment: Environment | None
    variables: dict[str, str]
