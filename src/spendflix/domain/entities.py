"""Domain model entities for spendflix.

These are pure data classes representing business concepts, independent of
database schema. Services and the database interface exchange these rather
than ORM rows, so persistence details stay inside the database package.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class SourceType(str, Enum):
    """Known statement file shapes."""

    ACCOUNT_STATEMENT_CSV = "ACCOUNT_STATEMENT_CSV"
    CREDIT_CARD_STATEMENT_CSV = "CREDIT_CARD_STATEMENT_CSV"


class SourceStatus(str, Enum):
    """Processing state of an uploaded statement file."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    user_id: int
    name: str
    bank_number: Optional[str]
    source_type: Optional[SourceType]
    created_at: datetime


@dataclass(frozen=True)
class Source:
    """One uploaded statement file and its processing state."""

    id: int
    account_id: int
    source_type: SourceType
    status: SourceStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity with hierarchical structure."""

    id: int
    name: str
    color: Optional[str]
    parent_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class CategoryRule:
    """Learned keyword to category association.

    A null account_id marks a global (seed) rule shared by every account.
    """

    id: int
    keyword: str
    account_id: Optional[int]
    category_id: int
    occurrences: int
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    account_id: int
    source_id: Optional[int]
    date: date
    description: str
    amount: Decimal
    checksum: str
    category_id: Optional[int]
    category_rule_id: Optional[int]
    category_score: Optional[float]
    notes: Optional[str]
    is_hidden: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewTransaction:
    """Normalized row ready to be inserted."""

    account_id: int
    source_id: Optional[int]
    date: date
    description: str
    amount: Decimal
    checksum: str
    category_id: Optional[int] = None
    category_rule_id: Optional[int] = None
    category_score: Optional[float] = None


@dataclass(frozen=True)
class CategoryMatch:
    """Result of categorizing one description."""

    category_id: int
    category_rule_id: Optional[int]
    account_id: Optional[int]
    score: float


@dataclass
class UncategorizedGroup:
    """Uncategorized transactions sharing one sanitized description."""

    key: str
    ids: list[int] = field(default_factory=list)
    descriptions: list[str] = field(default_factory=list)
    values: list[Decimal] = field(default_factory=list)


@dataclass(frozen=True)
class UncategorizedSummary:
    """Review payload for one user."""

    categorized_count: int
    uncategorized_count: int
    categorized_percent: float
    groups: list[UncategorizedGroup]
