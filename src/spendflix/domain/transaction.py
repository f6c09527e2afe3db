"""Transaction domain service."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.entities import Transaction as TransactionEntity
from spendflix.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from spendflix.domain.rule_learner import RuleLearner


@dataclass(frozen=True)
class MonthlyTotal:
    """Number and sum of an account's transactions in one month."""

    month: str
    count: int
    total: Decimal


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database, rule_learner: Optional[RuleLearner] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            rule_learner: Learner used for category corrections; built from db if omitted
        """
        self.db = db
        self.rule_learner = rule_learner if rule_learner is not None else RuleLearner(db)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        user_id: Optional[int] = None,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        include_hidden: bool = False,
    ) -> list[TransactionEntity]:
        """List transactions matching the filters, newest first.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")

        return self.db.list_transactions(
            user_id=user_id,
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            uncategorized=uncategorized,
            include_hidden=include_hidden,
        )

    def update_category(self, transaction_ids: list[int], category_id: int) -> Optional[int]:
        """Categorize transactions by hand and learn a rule from it.

        Args:
            transaction_ids: Transactions sharing one description
            category_id: Chosen category

        Returns:
            ID of the learned rule, or None when no IDs were given

        Raises:
            NotFoundError: If a transaction or the category doesn't exist
        """
        for transaction_id in transaction_ids:
            if self.db.get_transaction(transaction_id) is None:
                raise NotFoundError(transaction_not_found(transaction_id))

        return self.rule_learner.learn(transaction_ids, category_id)

    def update_notes(self, transaction_id: int, notes: Optional[str]) -> None:
        """Update transaction notes.

        Args:
            transaction_id: Transaction ID
            notes: Notes text, or None to clear

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.update_transaction_notes(transaction_id, notes or None)

    def set_hidden(self, transaction_id: int, is_hidden: bool = True) -> None:
        """Hide a transaction from listings, or show it again.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.set_transaction_hidden(transaction_id, is_hidden)

    def count_per_month(self, account_id: int) -> list[MonthlyTotal]:
        """Count and sum an account's transactions per month, latest month first.

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        months: dict[str, tuple[int, Decimal]] = {}
        for txn in self.db.list_transactions(account_id=account_id):
            key = txn.date.strftime("%Y-%m")
            count, total = months.get(key, (0, Decimal("0")))
            months[key] = (count + 1, total + txn.amount)

        return [
            MonthlyTotal(month=month, count=count, total=total)
            for month, (count, total) in sorted(months.items(), reverse=True)
        ]
