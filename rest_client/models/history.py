"""
History model for storing executed request records.

Each execution attempt of a request, successful or not, creates one row
containing the request sent, the captured response and timing information.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form SQLite stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RequestHistory(Base):
    """
    SQLAlchemy model for request execution history.

    ``headers`` and ``response`` are JSON documents stored as opaque text;
    ``HistoryStore`` encodes and decodes them at the boundary.

    Attributes:
        id: Auto-increment identifier, never reused
        url: Target URL as sent (after variable substitution)
        method: HTTP method used
        headers: JSON-encoded request headers
        body: Body sent with the request
        response: JSON-encoded response document, or ``{"error": ...}``
        status_code: HTTP status code, 0 when no response was received
        created_at: Timestamp when the entry was inserted
        updated_at: Timestamp of the last mutation
        response_time: Request execution time in milliseconds
        name: Optional user-defined label
    """
    __tablename__ = "request_history"
    __table_args__ = (
        CheckConstraint(
            "method in ('GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'HEAD', 'OPTIONS')",
            name="request_history_method_check",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text)
    method: Mapped[str] = mapped_column(Text)
    headers: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status_code: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)
    response_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
