"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from ledgerscore.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "LEDGERSCORE_DB_PATH"
DEFAULT_DB_PATH = Path.home() / ".ledgerscore" / "ledgerscore.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the reference-list database file.

    The explicit argument wins, then LEDGERSCORE_DB_PATH, then
    ~/.ledgerscore/ledgerscore.db. The parent directory is created if needed.
    """
    raw_path = database_path or os.environ.get(DB_PATH_ENV)
    path = Path(raw_path).expanduser() if raw_path else DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file (see resolve_database_path)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    logger.debug("Using reference-list database %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
