"""Shared pytest fixtures for spendflix tests."""

import os
import tempfile
from datetime import datetime, UTC

import pytest

from spendflix.database.factories import create_sqlite_database
from spendflix.domain.account import AccountService
from spendflix.domain.categorizer import Categorizer
from spendflix.domain.category import CategoryService
from spendflix.domain.entities import SourceType
from spendflix.domain.importer import ImporterService
from spendflix.domain.rule_learner import RuleLearner
from spendflix.domain.source import SourceService
from spendflix.domain.transaction import TransactionService
from spendflix.storage.local import LocalObjectStore
from spendflix.utils.concurrency import ConcurrencyLimiter

USER_ID = 1

ACCOUNT_CSV = (
    "date,amount,description\n"
    "01/03/2025,-117.51,Débito em conta\n"
    "2025-03-02,-42.90,IFOOD *Restaurante Sabor\n"
    "05/03/2025,3500.00,Transferência recebida ACME LTDA\n"
    "06/03/2025,250.00,Pagamento recebido\n"
)

CREDIT_CARD_CSV = (
    "date,title,amount\n"
    "2025-03-10,Uber* Trip,25.84\n"
    "2025-03-11,Netflix.com,39.90\n"
    "2025-03-12,Padaria Real - Parcela 2/3,18.00\n"
)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(tmp_path):
    """Object store rooted in a temporary directory."""
    return LocalObjectStore(tmp_path / "objects")


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def source_service(temp_db, store):
    """Create a SourceService backed by the temporary store."""
    return SourceService(temp_db, store)


@pytest.fixture
def categorizer(temp_db):
    return Categorizer(temp_db)


@pytest.fixture
def rule_learner(temp_db):
    return RuleLearner(temp_db)


@pytest.fixture
def importer(temp_db, store):
    """Importer running rows on a small worker pool."""
    return ImporterService(temp_db, store, limiter=ConcurrencyLimiter(3))


@pytest.fixture
def sample_account(account_service):
    """Account that accepts any statement type."""
    account_id = account_service.create_account(user_id=USER_ID, name="Checking", bank_number="260")
    return account_service.get_account(account_id)


@pytest.fixture
def card_account(account_service):
    """Account that only accepts credit card statements."""
    account_id = account_service.create_account(
        user_id=USER_ID,
        name="Nubank Card",
        bank_number="260",
        source_type=SourceType.CREDIT_CARD_STATEMENT_CSV,
    )
    return account_service.get_account(account_id)


@pytest.fixture
def sample_categories(category_service):
    """Create a few categories, including Income, and return their IDs by name."""
    ids = {}
    for name, color in [
        ("Income", "green-900"),
        ("Food & Dining", "indigo-200"),
        ("Transportation", "purple-200"),
        ("Leisure", "green-300"),
    ]:
        ids[name] = category_service.create_category(name=name, color=color)
    ids["Restaurants"] = category_service.create_category(
        name="Restaurants", parent_path="Food & Dining"
    )
    return ids


@pytest.fixture
def make_rule(temp_db):
    """Create a rule directly in the store."""

    def _make_rule(keyword, category_id, account_id=None, occurrences=1, updated_at=None):
        return temp_db.create_category_rule(
            keyword=keyword,
            category_id=category_id,
            account_id=account_id,
            occurrences=occurrences,
            updated_at=updated_at or datetime.now(UTC),
        )

    return _make_rule


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
