"""
Pydantic schemas for request execution.

Defines the two outcomes of executing a draft: a captured response (any
HTTP status) or a network failure.
"""

from typing import Any

from .base import CamelModel


class ExecuteResponse(CamelModel):
    """
    Schema for a completed request execution.

    Every HTTP status code, including 4xx and 5xx, is reported here.
    """
    status: int
    status_text: str
    headers: dict[str, str]
    data: Any = None
    response_time: int


class ExecuteErrorResponse(ExecuteResponse):
    """Schema for an execution that never received a response."""
    error: str
