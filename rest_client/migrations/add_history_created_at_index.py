"""
Migration: Add an index backing the history listing order.

History is listed by created_at descending with id as tie breaker.
"""

import logging

from sqlalchemy import Engine, inspect, text

logger = logging.getLogger(__name__)

INDEX_NAME = "request_history_created_at_id_index"


def migrate(engine: Engine) -> None:
    """Create the (created_at, id) index on request_history if it doesn't exist."""
    inspector = inspect(engine)
    indexes = [index["name"] for index in inspector.get_indexes("request_history")]

    if INDEX_NAME in indexes:
        logger.debug("Migration skipped: %s already exists.", INDEX_NAME)
        return

    with engine.begin() as conn:
        conn.execute(
            text(f"CREATE INDEX {INDEX_NAME} ON request_history (created_at, id)")
        )
    logger.info("Migration complete: Added %s.", INDEX_NAME)


if __name__ == "__main__":
    from sqlalchemy import create_engine

    from rest_client.config import settings

    migrate(create_engine(settings.DATABASE_URL))
