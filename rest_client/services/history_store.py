"""
History store for request execution records.

Wraps the ``request_history`` table. Request headers and the response
document are stored as JSON text and decoded here, so callers only ever
handle objects. Storage failures surface as ``StorageError``.
"""

import json
import logging
import math
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import ResourceNotFoundError, StorageError, ValidationError
from ..models.history import RequestHistory, utcnow
from ..schemas.history import HistoryEntryCreate, HistoryItem, HistoryPage

logger = logging.getLogger(__name__)


def _encode(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value)


def _decode(text: str | None) -> Any:
    if text is None:
        return None
    return json.loads(text)


def to_history_item(record: RequestHistory) -> HistoryItem:
    """Convert a row into its decoded representation."""
    return HistoryItem(
        id=record.id,
        url=record.url,
        method=record.method,
        headers=_decode(record.headers) or {},
        body=record.body,
        response=_decode(record.response),
        status_code=record.status_code,
        created_at=record.created_at,
        updated_at=record.updated_at,
        response_time=record.response_time,
        name=record.name,
    )


class HistoryStore:
    """
    Durable, queryable log of executed requests.

    Ordering is ``created_at`` descending with ``id`` descending as the
    tie breaker. Search is a case-sensitive substring match on ``url`` or
    ``name`` (SQLite ``instr``, so ``%`` and ``_`` match themselves).
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str) -> StorageError:
        self.db.rollback()
        logger.exception("History store failed to %s", action)
        return StorageError(f"Failed to {action}")

    def append(self, entry: HistoryEntryCreate) -> int:
        """
        Store a new entry and return its id.

        Args:
            entry: The request and outcome to record

        Returns:
            The assigned id
        """
        now = utcnow()
        record = RequestHistory(
            url=entry.url,
            method=entry.method,
            headers=_encode(entry.headers),
            body=entry.body,
            response=_encode(entry.response),
            status_code=entry.status_code,
            created_at=now,
            updated_at=now,
            response_time=entry.response_time,
            name=entry.name,
        )
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._fail("save history entry") from exc
        return record.id

    def list(
        self,
        search: str | None = None,
        method: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> HistoryPage:
        """
        Get one page of history entries, newest first.

        Args:
            search: Substring to look for in url or name
            method: Exact HTTP method to filter on
            page: 1-based page number
            page_size: Number of entries per page

        Returns:
            HistoryPage with the page items, total count and page count
        """
        if page < 1 or page_size < 1:
            raise ValidationError("page and page_size must be >= 1")

        query = self.db.query(RequestHistory)
        if search:
            query = query.filter(or_(
                func.instr(RequestHistory.url, search) > 0,
                func.instr(RequestHistory.name, search) > 0,
            ))
        if method:
            query = query.filter(RequestHistory.method == method)

        try:
            total = query.count()
            records = (
                query
                .order_by(RequestHistory.created_at.desc(), RequestHistory.id.desc())
                .offset((page - 1) * page_size)
                .limit(page_size)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("list history") from exc

        return HistoryPage(
            items=[to_history_item(record) for record in records],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )

    def _find(self, history_id: int) -> RequestHistory | None:
        return self.db.query(RequestHistory).filter(RequestHistory.id == history_id).first()

    def get(self, history_id: int) -> HistoryItem:
        """
        Get a single entry by id.

        Raises:
            ResourceNotFoundError: if no entry has this id
        """
        try:
            record = self._find(history_id)
        except SQLAlchemyError as exc:
            raise self._fail("read history entry") from exc
        if record is None:
            raise ResourceNotFoundError("History item", history_id)
        return to_history_item(record)

    def delete_by_id(self, history_id: int) -> bool:
        """
        Delete a single entry by id.

        Returns:
            True if the entry was removed, False if it did not exist
        """
        try:
            record = self._find(history_id)
            if record is None:
                return False
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete history entry") from exc
        logger.debug("Deleted history entry %s", history_id)
        return True
