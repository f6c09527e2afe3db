"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

THOUSANDS_GROUPS = re.compile(r"^-?\d{1,3}([.,]\d{3})+$")


def _normalize_separators(amount_str: str) -> str:
    """Rewrite the number with '.' as its only decimal separator.

    The right-most of ',' and '.' is the decimal separator when both occur.
    A lone ',' is decimal when one or two digits follow it, and a thousands
    separator when it splits the number into groups of three.
    """
    last_comma = amount_str.rfind(",")
    last_dot = amount_str.rfind(".")

    if last_comma >= 0 and last_dot >= 0:
        if last_comma > last_dot:
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")

    if last_comma >= 0:
        if amount_str.count(",") == 1 and 1 <= len(amount_str) - last_comma - 1 <= 2:
            return amount_str.replace(",", ".")
        if THOUSANDS_GROUPS.match(amount_str):
            return amount_str.replace(",", "")
        raise ValueError(f"Ambiguous separators in amount '{amount_str}'")

    return amount_str


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "-117,51" (comma decimal)
    - "R$ 1.234,56" and "$1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or its separators are ambiguous
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str).replace(" ", "")
    amount_str = _normalize_separators(amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
