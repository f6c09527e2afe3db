"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal
from typing import Optional

from spendflix.domain import entities as domain
from spendflix.database.models import (
    Account as ORMAccount,
    Source as ORMSource,
    Category as ORMCategory,
    CategoryRule as ORMCategoryRule,
    Transaction as ORMTransaction,
)


def _source_type(value: Optional[str]):
    # Unknown stored values pass through so the importer can report them
    if value is None:
        return None
    try:
        return domain.SourceType(value)
    except ValueError:
        return value


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        bank_number=orm_account.bank_number,
        source_type=_source_type(orm_account.source_type),
        created_at=orm_account.created_at,
    )


def source_to_domain(orm_source: ORMSource) -> domain.Source:
    """Convert SQLAlchemy Source model to domain Source entity."""
    return domain.Source(
        id=orm_source.id,
        account_id=orm_source.account_id,
        source_type=_source_type(orm_source.source_type),
        status=domain.SourceStatus(orm_source.status),
        created_at=orm_source.created_at,
        updated_at=orm_source.updated_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        color=orm_category.color,
        parent_id=orm_category.parent_id,
        created_at=orm_category.created_at,
    )


def category_rule_to_domain(orm_rule: ORMCategoryRule) -> domain.CategoryRule:
    """Convert SQLAlchemy CategoryRule model to domain CategoryRule entity."""
    return domain.CategoryRule(
        id=orm_rule.id,
        keyword=orm_rule.keyword,
        account_id=orm_rule.account_id,
        category_id=orm_rule.category_id,
        occurrences=orm_rule.occurrences,
        updated_at=orm_rule.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        source_id=orm_transaction.source_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=Decimal(orm_transaction.amount),
        checksum=orm_transaction.checksum,
        category_id=orm_transaction.category_id,
        category_rule_id=orm_transaction.category_rule_id,
        category_score=orm_transaction.category_score,
        notes=orm_transaction.notes,
        is_hidden=orm_transaction.is_hidden,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )
