"""Database layer for ledgerscore reference lists."""

from ledgerscore.database.base import Database
from ledgerscore.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
