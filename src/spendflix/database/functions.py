"""Text functions the rule-matching query calls inside the database.

PostgreSQL provides ``similarity`` through pg_trgm; for SQLite both
functions are registered on each new DBAPI connection.
"""

import re
from functools import lru_cache

from rapidfuzz import fuzz


def similarity(text: str | None, keyword: str | None) -> float:
    """Return the normalized edit similarity of two strings in [0, 1]."""
    if not text or not keyword:
        return 0.0
    return fuzz.ratio(text.lower(), keyword.lower()) / 100.0


@lru_cache(maxsize=1024)
def _word_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)", re.IGNORECASE)


def word_match(text: str | None, keyword: str | None) -> int:
    """Return 1 when keyword occurs in text as whole tokens, else 0."""
    if not text or not keyword or not keyword.strip():
        return 0
    return 1 if _word_pattern(keyword.strip()).search(text) else 0


def register_text_functions(dbapi_connection, connection_record) -> None:
    """SQLAlchemy ``connect`` listener installing the functions on SQLite."""
    dbapi_connection.create_function("similarity", 2, similarity, deterministic=True)
    dbapi_connection.create_function("word_match", 2, word_match, deterministic=True)
