"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date, datetime

from spendflix.domain.entities import (
    Account,
    Source,
    SourceStatus,
    SourceType,
    Category,
    CategoryRule,
    NewTransaction,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for spendflix.

    Implementations must be usable from several worker threads at once and
    must enforce transaction checksum uniqueness and rule tuple uniqueness
    at insert time.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the calling thread's session and connection."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: int,
        name: str,
        bank_number: Optional[str] = None,
        source_type: Optional[SourceType] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str) -> Optional[Account]:
        """Get account by its unique name."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally only those owned by one user."""
        pass

    # Source operations
    @abstractmethod
    def create_source(self, account_id: int, source_type: SourceType) -> int:
        """Create a PENDING source. Returns source ID."""
        pass

    @abstractmethod
    def get_source(self, source_id: int) -> Optional[Source]:
        """Get source by ID."""
        pass

    @abstractmethod
    def list_sources(
        self, account_id: Optional[int] = None, status: Optional[SourceStatus] = None
    ) -> list[Source]:
        """List sources, newest first."""
        pass

    @abstractmethod
    def update_source_status(self, source_id: int, status: SourceStatus) -> None:
        """Set the processing status of a source."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, color: Optional[str] = None, parent_id: Optional[int] = None
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by its unique name."""
        pass

    @abstractmethod
    def get_category_by_path(self, path: str) -> Optional[Category]:
        """Get category by path (e.g., 'Food > Restaurants')."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        pass

    @abstractmethod
    def get_category_tree(self) -> list[dict[str, Any]]:
        """Get full category tree with hierarchy.

        Returns a list of dictionaries with category data and nested 'children' lists.
        """
        pass

    # Category rule operations
    @abstractmethod
    def create_category_rule(
        self,
        keyword: str,
        category_id: int,
        account_id: Optional[int] = None,
        occurrences: int = 1,
        updated_at: Optional[datetime] = None,
    ) -> int:
        """Create a category rule. Returns rule ID.

        Raises:
            ConflictError: If the (keyword, account_id, category_id) tuple exists
        """
        pass

    @abstractmethod
    def ensure_global_rule(self, keyword: str, category_id: int) -> int:
        """Atomically insert a global rule unless present. Returns its ID."""
        pass

    @abstractmethod
    def get_category_rule(self, rule_id: int) -> Optional[CategoryRule]:
        """Get category rule by ID."""
        pass

    @abstractmethod
    def find_category_rule(
        self, keyword: str, account_id: Optional[int], category_id: int
    ) -> Optional[CategoryRule]:
        """Get the rule for an exact (keyword, account_id, category_id) tuple."""
        pass

    @abstractmethod
    def list_category_rules(self, account_id: Optional[int] = None) -> list[CategoryRule]:
        """List rules; with account_id, that account's rules plus global rules."""
        pass

    @abstractmethod
    def upsert_category_rule(self, keyword: str, account_id: int, category_id: int) -> int:
        """Atomically create the rule or count one more occurrence. Returns rule ID."""
        pass

    @abstractmethod
    def match_category_rules(
        self, description: str, account_id: int, threshold: float, limit: Optional[int] = None
    ) -> list[tuple[CategoryRule, float]]:
        """Return candidate rules with their scores, best first.

        Candidates are the account's rules and global rules whose keyword is
        fuzzily similar to the description (above threshold) or occurs in it
        as whole tokens. Score is the larger of the similarity and 1.0 for a
        whole-token match. Ordering: account-specific first, then score,
        raw similarity, occurrences and updated_at, all descending. Raw
        similarity makes "burger king" beat "burger" for "burger king combo".
        """
        pass

    # Transaction operations
    @abstractmethod
    def insert_transaction(self, transaction: NewTransaction) -> Optional[int]:
        """Insert unless the checksum exists. Returns the new ID, or None on conflict."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def transaction_exists(self, checksum: str) -> bool:
        """Check if a transaction with the given checksum exists."""
        pass

    @abstractmethod
    def update_transactions_category(
        self,
        transaction_ids: list[int],
        category_id: Optional[int],
        category_rule_id: Optional[int],
        category_score: Optional[float],
    ) -> int:
        """Bulk-set category fields. Returns number of rows updated."""
        pass

    @abstractmethod
    def update_transaction_notes(self, transaction_id: int, notes: Optional[str]) -> None:
        """Update transaction notes."""
        pass

    @abstractmethod
    def set_transaction_hidden(self, transaction_id: int, is_hidden: bool) -> None:
        """Hide or unhide a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: Optional[int] = None,
        account_id: Optional[int] = None,
        source_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        include_hidden: bool = True,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            user_id: Only transactions of accounts owned by this user
            account_id: Optional account ID filter
            source_id: Optional source ID filter
            start_date: Optional start date filter
            end_date: Optional end date filter
            category_id: Optional category ID filter
            uncategorized: If True, only return transactions without a category
            include_hidden: If False, skip hidden transactions
        """
        pass

    @abstractmethod
    def count_transactions_by_categorization(self, user_id: int) -> tuple[int, int]:
        """Return (categorized, uncategorized) counts across a user's accounts."""
        pass
