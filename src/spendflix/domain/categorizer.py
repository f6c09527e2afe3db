"""Rule-based categorization of transaction descriptions."""

import logging
import re
import unicodedata
from decimal import Decimal
from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.entities import CategoryMatch

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.3
INCOME_CATEGORY_NAME = "Income"

_INSTALLMENT_PATTERN = re.compile(r"\b(?:parcela|installment)\s+\d+\s*/\s*\d+", re.IGNORECASE)
_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_description(description: str) -> str:
    """Reduce a description to the form rule keywords are stored in.

    Installment markers ("Parcela 2/10", "installment 3/12") are dropped,
    diacritics are stripped, then anything not alphanumeric or whitespace.
    The result is whitespace-collapsed, trimmed and lowercased.

    Example:
        >>> sanitize_description("  Padaria São João - Parcela 2/10 ")
        'padaria sao joao'
    """
    text = _INSTALLMENT_PATTERN.sub(" ", description)
    decomposed = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    text = _NON_ALPHANUMERIC.sub("", text)
    return _WHITESPACE.sub(" ", text).strip().lower()


class Categorizer:
    """Picks the best learned rule for a transaction description."""

    def __init__(
        self,
        db: Database,
        threshold: float = SIMILARITY_THRESHOLD,
        income_category_name: str = INCOME_CATEGORY_NAME,
    ):
        """Initialize categorizer.

        Args:
            db: Database instance
            threshold: Minimum fuzzy similarity for a rule to be a candidate
            income_category_name: Category assigned to unmatched positive amounts
        """
        self.db = db
        self.threshold = threshold
        self.income_category_name = income_category_name

    def categorize(
        self, description: str, account_id: int, amount: Decimal
    ) -> Optional[CategoryMatch]:
        """Infer a category for one transaction.

        The ranked rule query puts account-specific rules before global ones,
        then orders by score, occurrences and recency. When no rule applies,
        positive amounts fall back to the income category with score 0.

        Args:
            description: Raw transaction description
            account_id: Account the transaction belongs to
            amount: Signed amount (income positive)

        Returns:
            The match, or None to leave the transaction uncategorized
        """
        sanitized = sanitize_description(description)
        if sanitized:
            ranked = self.db.match_category_rules(sanitized, account_id, self.threshold, limit=1)
            if ranked:
                rule, score = ranked[0]
                logger.debug(
                    "Matched '%s' to rule %s (%s) with score %.3f",
                    sanitized,
                    rule.id,
                    rule.keyword,
                    score,
                )
                return CategoryMatch(
                    category_id=rule.category_id,
                    category_rule_id=rule.id,
                    account_id=rule.account_id,
                    score=score,
                )

        if amount > 0:
            income = self.db.get_category_by_name(self.income_category_name)
            if income is None:
                logger.warning(
                    "No '%s' category exists; leaving income uncategorized",
                    self.income_category_name,
                )
                return None
            return CategoryMatch(
                category_id=income.id,
                category_rule_id=None,
                account_id=account_id,
                score=0.0,
            )

        return None
