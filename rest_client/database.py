"""
Database handle for the REST client backend.

Uses SQLite as the data storage backend with SQLAlchemy ORM. The handle is
constructed explicitly by the application lifespan and shared through
``app.state``; schema migrations run once on ``init()``.
"""

import logging
import threading
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .migrations import run_migrations

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Database:
    """
    Owns the engine and session factory for one database URL.

    Usage:
        database = Database("sqlite:///./rest-client.db")
        database.init()
        with database.session() as db:
            ...
        database.dispose()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {}
        if url.startswith("sqlite"):
            # Required for SQLite with FastAPI
            connect_args["check_same_thread"] = False
            if url.startswith("sqlite:///") and ":memory:" not in url:
                Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(url, connect_args=connect_args, echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self._init_lock = threading.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> None:
        """
        Run pending schema migrations.

        Safe to call more than once; only the first caller applies migrations.
        """
        with self._init_lock:
            if self._initialized:
                return
            run_migrations(self.engine)
            self._initialized = True
            logger.info("Database initialized at %s", self.url)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        """Release all pooled connections."""
        self.engine.dispose()
        self._initialized = False
        logger.info("Database connections released")


def get_db(request: Request):
    """
    Dependency function for FastAPI to get database sessions.

    Yields a session from the application's database handle and ensures
    it's closed after use.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
