"""Utility functions for spendflix."""

from spendflix.utils.date_parser import parse_date, parse_statement_date
from spendflix.utils.amount_parser import parse_amount
from spendflix.utils.concurrency import ConcurrencyLimiter

__all__ = ["parse_date", "parse_statement_date", "parse_amount", "ConcurrencyLimiter"]
