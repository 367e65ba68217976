"""SQLite database construction for the CLI and tests."""

import os
from pathlib import Path
from typing import Optional

from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "FINTRACK_DB_PATH"
DEFAULT_DB_PATH = Path("~/.fintrack/fintrack.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the database file and make sure its directory exists.

    An explicit path wins, then $FINTRACK_DB_PATH, then ~/.fintrack/fintrack.db.
    A leading "~" is expanded in all three.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV)
    path = Path(raw) if raw else DEFAULT_DB_PATH
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create an unconnected SQLite database at the resolved path."""
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
