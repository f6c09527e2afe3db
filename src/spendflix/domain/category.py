"""Category domain service."""

from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.categorizer import sanitize_description
from spendflix.domain.entities import Category, CategoryRule
from spendflix.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    category_path_not_found,
)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, name: str, color: Optional[str] = None, parent_path: Optional[str] = None
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            color: Optional display color (e.g., "#ff6b6b")
            parent_path: Optional parent category path (e.g., "Food & Dining")

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a category with this name exists
            NotFoundError: If parent category doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(f"Category '{name}' already exists")

        parent_id = None
        if parent_path is not None:
            parent = self.db.get_category_by_path(parent_path)
            if parent is None:
                raise NotFoundError(category_path_not_found(parent_path))
            parent_id = parent.id

        return self.db.create_category(name=name, color=color, parent_id=parent_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by its unique name."""
        return self.db.get_category_by_name(name)

    def get_category_by_path(self, path: str) -> Optional[Category]:
        """Get category by path.

        Args:
            path: Category path (e.g., "Food & Dining > Groceries")

        Returns:
            Category or None if not found
        """
        return self.db.get_category_by_path(path)

    def resolve_category(self, value: str) -> Category:
        """Find a category by ID, path or name.

        Raises:
            NotFoundError: If nothing matches
        """
        if value.isdigit():
            category = self.db.get_category(int(value))
        elif ">" in value:
            category = self.db.get_category_by_path(value)
        else:
            category = self.db.get_category_by_name(value.strip())
        if category is None:
            raise NotFoundError(category_path_not_found(value))
        return category

    def list_categories(self) -> list[Category]:
        """List categories ordered by name."""
        return self.db.list_categories()

    def get_category_tree(self) -> list[dict]:
        """Get full category tree.

        Returns:
            List of root categories with nested children
        """
        return self.db.get_category_tree()

    def format_category_path(self, category_id: int) -> str:
        """Get full path for a category (e.g., "Food & Dining > Groceries")."""
        cat = self.get_category(category_id)
        if cat is None:
            return ""

        path_parts = [cat.name]
        current_parent_id = cat.parent_id
        while current_parent_id is not None:
            parent = self.get_category(current_parent_id)
            if parent is None:
                break
            path_parts.append(parent.name)
            current_parent_id = parent.parent_id

        return " > ".join(reversed(path_parts))

    def add_global_rule(self, keyword: str, category_id: int) -> int:
        """Create a rule shared by every account.

        The keyword is sanitized the way descriptions are before matching.

        Returns:
            Rule ID, or the existing rule's ID when it is already present

        Raises:
            ValidationError: If the keyword sanitizes to nothing
            NotFoundError: If the category doesn't exist
        """
        normalized = sanitize_description(keyword)
        if not normalized:
            raise ValidationError(f"Rule keyword '{keyword}' is empty after normalization")
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        return self.db.ensure_global_rule(normalized, category_id)

    def list_rules(self, account_id: Optional[int] = None) -> list[CategoryRule]:
        """List rules; with account_id, that account's rules plus global rules."""
        return self.db.list_category_rules(account_id=account_id)
