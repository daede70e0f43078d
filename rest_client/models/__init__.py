"""
Models package for the REST client backend.

Exports all SQLAlchemy models for database operations.
"""

from .history import HTTP_METHODS, RequestHistory

__all__ = [
    "HTTP_METHODS",
    "RequestHistory",
]
