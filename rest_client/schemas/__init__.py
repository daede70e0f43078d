"""
Pydantic schemas package.

Exports all schemas for API request/response validation.
"""

from .base import CamelModel

from .request import (
    HttpMethod,
    RequestDraft,
    HttpRequest,
)

from .execute import (
    ExecuteResponse,
    ExecuteErrorResponse,
)

from .history import (
    HistoryEntryCreate,
    HistoryItem,
    HistoryPage,
    HistoryListResponse,
    DeleteResponse,
)

from .collection import (
    Collection,
    CollectionCreate,
    CollectionUpdate,
)

from .environment import (
    Environment,
    EnvironmentsDocument,
    EnvironmentCreate,
    EnvironmentUpdate,
    VariablesUpdate,
    ActiveEnvironmentUpdate,
    ActiveEnvironmentResponse,
)

from .backup import (
    EXPORT_VERSION,
    ExportDocument,
    ImportDocument,
    ImportResult,
)

__all__ = [
    "CamelModel",
    # Request schemas
    "HttpMethod",
    "RequestDraft",
    "HttpRequest",
    # Execute schemas
    "ExecuteResponse",
    "ExecuteErrorResponse",
    # History schemas
    "HistoryEntryCreate",
    "HistoryItem",
    "HistoryPage",
    "HistoryListResponse",
    "DeleteResponse",
    # Collection schemas
    "Collection",
    "CollectionCreate",
    "CollectionUpdate",
    # Environment schemas
    "Environment",
    "EnvironmentsDocument",
    "EnvironmentCreate",
    "EnvironmentUpdate",
    "VariablesUpdate",
    "ActiveEnvironmentUpdate",
    "ActiveEnvironmentResponse",
    # Backup schemas
    "EXPORT_VERSION",
    "ExportDocument",
    "ImportDocument",
    "ImportResult",
]
