"""Account domain service."""

from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.entities import Account as AccountEntity, SourceType
from spendflix.domain.errors import ConflictError, ValidationError


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: int,
        name: str,
        bank_number: Optional[str] = None,
        source_type: Optional[SourceType] = None,
    ) -> int:
        """Create a new account.

        Args:
            user_id: Owner of the account
            name: Account name
            bank_number: Optional bank number
            source_type: Expected statement shape; None accepts any

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name must not be empty")
        if self.db.get_account_by_name(name) is not None:
            raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(
            user_id=user_id, name=name, bank_number=bank_number, source_type=source_type
        )

    def first_or_create(
        self,
        user_id: int,
        name: str,
        bank_number: Optional[str] = None,
        source_type: Optional[SourceType] = None,
    ) -> AccountEntity:
        """Return the user's account with this name, creating it if absent.

        Raises:
            ConflictError: If another user already owns an account with this name
        """
        existing = self.db.get_account_by_name(name.strip())
        if existing is not None:
            if existing.user_id != user_id:
                raise ConflictError(f"Account with name '{name}' already exists")
            return existing

        account_id = self.create_account(user_id, name, bank_number, source_type)
        return self.db.get_account(account_id)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, user_id: Optional[int] = None) -> list[AccountEntity]:
        """List accounts, optionally only those of one user."""
        return self.db.list_accounts(user_id=user_id)
