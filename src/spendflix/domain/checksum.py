"""Content hashing used to make row import idempotent."""

import hashlib
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")


def calculate_checksum(account_id: int, txn_date: date, description: str, amount: Decimal) -> str:
    """Return the SHA-256 hex digest identifying a transaction candidate.

    The date is truncated to the day, the description trimmed and
    lowercased and the amount fixed to two decimals, so cosmetic
    differences between two exports of the same statement hash equal.
    """
    if isinstance(txn_date, datetime):
        txn_date = txn_date.date()
    normalized_description = description.strip().lower()
    normalized_amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    payload = f"{account_id}|{txn_date.isoformat()}|{normalized_description}|{normalized_amount}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
