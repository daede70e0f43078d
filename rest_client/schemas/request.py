"""
Pydantic schemas for HTTP request drafts.

Defines the draft a client composes before sending, with HTTP method
validation.
"""

from typing import Literal

from pydantic import BaseModel

# HTTP methods supported by the system
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


class RequestDraft(BaseModel):
    """An unsent request: everything needed to perform one HTTP call."""
    url: str
    method: HttpMethod
    headers: dict[str, str] = {}
    body: str | None = None
    name: str | None = None


class HttpRequest(BaseModel):
    """
    Body of ``POST /api/request``.

    ``url`` and ``method`` are checked by the router so that a missing value
    yields a 400 with a single readable message.
    """
    url: str | None = None
    method: HttpMethod | None = None
    headers: dict[str, str] = {}
    body: str | None = None
    name: str | None = None
