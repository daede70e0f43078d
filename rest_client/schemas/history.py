"""
Pydantic schemas for request execution history.

``headers`` and ``response`` are always decoded objects here; the JSON text
form exists only inside the storage layer.
"""

from datetime import datetime
from typing import Any

from .base import CamelModel
from .request import HttpMethod


class HistoryEntryCreate(CamelModel):
    """A history entry about to be appended."""
    url: str
    method: HttpMethod
    headers: dict[str, str] | None = None
    body: str | None = None
    response: Any = None
    status_code: int | None = None
    response_time: int | None = None
    name: str | None = None


class HistoryItem(CamelModel):
    """Schema for history record response with all fields."""
    id: int
    url: str
    method: str
    headers: dict[str, str] = {}
    body: str | None = None
    response: Any = None
    status_code: int | None = None
    created_at: datetime
    updated_at: datetime
    response_time: int | None = None
    name: str | None = None


class HistoryPage(CamelModel):
    """One page of history, as returned by ``HistoryStore.list``."""
    items: list[HistoryItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class HistoryListResponse(CamelModel):
    """Schema for paginated history list response."""
    data: list[HistoryItem]
    total: int
    page: int
    limit: int
    total_pages: int


class DeleteResponse(CamelModel):
    success: bool = True
