"""SQLAlchemy models for spendflix database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Float,
    UniqueConstraint,
    Index,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from spendflix.database.functions import register_text_functions

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String, unique=True, nullable=False)
    bank_number = Column(String, nullable=True)
    # Expected statement shape; NULL accepts any detected type
    source_type = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    sources = relationship("Source", back_populates="account", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="account", cascade="all, delete-orphan")


class Source(Base):
    """Uploaded statement file model."""

    __tablename__ = "sources"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    source_type = Column(String, nullable=False)
    status = Column(String, default="PENDING", nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="sources")
    transactions = relationship("Transaction", back_populates="source")


class Category(Base):
    """Category model with hierarchical structure."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    color = Column(String, nullable=True)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")
    transactions = relationship("Transaction", back_populates="category")
    rules = relationship("CategoryRule", back_populates="category", cascade="all, delete-orphan")


class CategoryRule(Base):
    """Learned keyword to category rule model."""

    __tablename__ = "category_rules"

    id = Column(Integer, primary_key=True)
    keyword = Column(String, nullable=False)
    # NULL marks a global rule
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    occurrences = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # NULLs are distinct in unique constraints, so global rules need their own index
    __table_args__ = (
        UniqueConstraint("keyword", "account_id", "category_id", name="uq_rule_keyword_account_category"),
        Index(
            "uq_global_rule_keyword_category",
            "keyword",
            "category_id",
            unique=True,
            sqlite_where=account_id.is_(None),
            postgresql_where=account_id.is_(None),
        ),
    )

    # Relationships
    category = relationship("Category", back_populates="rules")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    source_id = Column(Integer, ForeignKey("sources.id"), nullable=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    checksum = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    category_rule_id = Column(Integer, ForeignKey("category_rules.id"), nullable=True)
    category_score = Column(Float, nullable=True)
    notes = Column(String, nullable=True)
    is_hidden = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Re-imports rely on the store rejecting a second row with the same checksum
    __table_args__ = (UniqueConstraint("checksum", name="uq_transaction_checksum"),)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    source = relationship("Source", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    SQLite connections get the similarity and word_match functions used by
    the rule query, and may be shared by the import worker threads.
    """
    connect_args = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": 30}

    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    if is_sqlite:
        event.listen(engine, "connect", register_text_functions)

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
