"""Learning category rules from user corrections."""

import logging
from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.categorizer import sanitize_description
from spendflix.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)

# Score stored on transactions a user categorized by hand
CORRECTION_SCORE = 1.0


class RuleLearner:
    """Turns a user's category correction into an account-scoped rule."""

    def __init__(self, db: Database):
        """Initialize rule learner.

        Args:
            db: Database instance
        """
        self.db = db

    def learn(self, transaction_ids: list[int], category_id: int) -> Optional[int]:
        """Categorize transactions and remember the choice as a rule.

        The transactions are assumed to share one canonical description; the
        first one supplies the keyword and the account. Repeating a
        correction counts another occurrence on the existing rule instead of
        creating a second one.

        Args:
            transaction_ids: Transactions the user categorized
            category_id: Category they chose

        Returns:
            ID of the created or updated rule, or None when no IDs were given

        Raises:
            NotFoundError: If the first transaction, its account or the category is missing
            ValidationError: If the description sanitizes to nothing
        """
        if not transaction_ids:
            return None

        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        representative = self.db.get_transaction(transaction_ids[0])
        if representative is None:
            raise NotFoundError(transaction_not_found(transaction_ids[0]))
        account = self.db.get_account(representative.account_id)
        if account is None:
            raise NotFoundError(account_not_found(representative.account_id))

        keyword = sanitize_description(representative.description)
        if not keyword:
            raise ValidationError(
                f"Transaction {representative.id} has no description to learn from"
            )

        rule_id = self.db.upsert_category_rule(keyword, account.id, category_id)
        updated = self.db.update_transactions_category(
            transaction_ids,
            category_id=category_id,
            category_rule_id=rule_id,
            category_score=CORRECTION_SCORE,
        )
        logger.info(
            "Learned rule %s ('%s' -> category %s) for account %s; %d transactions updated",
            rule_id,
            keyword,
            category_id,
            account.id,
            updated,
        )
        return rule_id
