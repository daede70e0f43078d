"""
Schema migrations, applied in order at startup.

Each step inspects the live schema and is a no-op when already applied.
"""

from sqlalchemy import Engine

from . import add_history_created_at_index, create_request_history

MIGRATIONS = [
    create_request_history.migrate,
    add_history_created_at_index.migrate,
]


def run_migrations(engine: Engine) -> None:
    for migrate in MIGRATIONS:
        migrate(engine)
