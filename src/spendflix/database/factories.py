"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from spendflix.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SPENDFLIX_DB_PATH
            environment variable, then defaults to ~/.spendflix/spendflix.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SPENDFLIX_DB_PATH")

    if database_path is None:
        database_path = str(Path.home() / ".spendflix" / "spendflix.db")

    Path(database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)

    return SQLAlchemyDatabase(f"sqlite:///{Path(database_path).expanduser()}")
