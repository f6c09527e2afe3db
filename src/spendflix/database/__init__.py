"""Database layer for spendflix."""

from spendflix.database.base import Database
from spendflix.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
