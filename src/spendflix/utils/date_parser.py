"""Date parsing utilities."""

import re
from datetime import date

from dateutil import parser as date_parser

ISO_DATE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})")
DAY_FIRST_DATE = re.compile(r"^\s*\d{1,2}/\d{1,2}/\d{4}\s*$")


def parse_statement_date(date_str: str) -> date:
    """Parse a date cell from a bank statement.

    Supported formats:
    - ISO "YYYY-MM-DD" (anything after the day, such as a time, is dropped)
    - "DD/MM/YYYY"

    Args:
        date_str: Date cell content

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if not date_str or not date_str.strip():
        raise ValueError("Empty date string")

    iso = ISO_DATE.match(date_str)
    try:
        if iso:
            return date.fromisoformat(iso.group(1))
        if DAY_FIRST_DATE.match(date_str):
            return date_parser.parse(date_str.strip(), dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str.strip()}': {e}")

    raise ValueError(f"Unsupported date format '{date_str.strip()}'")


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date such as a CLI filter.

    Accepts anything dateutil understands ("2025-03-01", "March 1, 2025").

    Raises:
        ValueError: If date string cannot be parsed
    """
    try:
        return date_parser.parse(date_str.strip()).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
