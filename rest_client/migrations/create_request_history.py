"""
Migration: Create the request_history table.

The table uses AUTOINCREMENT so ids are never reused after deletes, and a
CHECK constraint restricting method to the seven supported HTTP methods.
"""

import logging

from sqlalchemy import Engine, inspect, text

logger = logging.getLogger(__name__)


def migrate(engine: Engine) -> None:
    """Create the request_history table if it doesn't exist."""
    inspector = inspect(engine)

    if "request_history" in inspector.get_table_names():
        logger.debug("Migration skipped: request_history table already exists.")
        return

    with engine.begin() as conn:
        conn.execute(text("""
            CREATE TABLE request_history (
                id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
                url TEXT NOT NULL,
                method TEXT NOT NULL
                    CONSTRAINT request_history_method_check
                    CHECK (method IN ('GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'HEAD', 'OPTIONS')),
                headers TEXT NULL,
                body TEXT NULL,
                response TEXT NULL,
                status_code INTEGER NULL,
                created_at DATETIME NOT NULL,
                updated_at DATETIME NOT NULL,
                response_time INTEGER NULL,
                name TEXT NULL
            )
        """))
    logger.info("Migration complete: Created request_history table.")


if __name__ == "__main__":
    from sqlalchemy import create_engine

    from rest_client.config import settings

    migrate(create_engine(settings.DATABASE_URL))
