"""Tests for statement import."""

from datetime import date
from decimal import Decimal

import pytest

from spendflix.domain.entities import SourceStatus, SourceType
from spendflix.domain.errors import ConfigurationError, NotFoundError
from spendflix.domain.importer import ImporterService, RowOutcome
from spendflix.domain.source_types import SOURCE_TYPE_CONFIGS, SourceTypeDetector
from spendflix.utils.concurrency import ConcurrencyLimiter

from conftest import ACCOUNT_CSV, CREDIT_CARD_CSV


def _upload(source_service, account, text):
    return source_service.upload(account.id, text.encode("utf-8"))


def _by_description(temp_db, account_id):
    return {txn.description: txn for txn in temp_db.list_transactions(account_id=account_id)}


def test_account_statement_day_first_date(
    temp_db, importer, source_service, sample_account, sample_categories
):
    source = _upload(source_service, sample_account, ACCOUNT_CSV)

    importer.run(source.id)

    txn = _by_description(temp_db, sample_account.id)["Débito em conta"]
    assert txn.date == date(2025, 3, 1)
    assert txn.amount == Decimal("-117.51")
    assert txn.source_id == source.id


def test_credit_card_amounts_are_inverted(temp_db, importer, source_service, sample_account):
    source = _upload(source_service, sample_account, CREDIT_CARD_CSV)

    importer.run(source.id)

    txn = _by_description(temp_db, sample_account.id)["Uber* Trip"]
    assert txn.date == date(2025, 3, 10)
    assert txn.amount == Decimal("-25.84")


def test_returns_rows_seen_and_marks_source_completed(
    temp_db, importer, source_service, sample_account, sample_categories
):
    source = _upload(source_service, sample_account, ACCOUNT_CSV)

    rows_seen = importer.import_source(source.id)

    assert rows_seen == 4
    assert len(temp_db.list_transactions(account_id=sample_account.id)) == 3
    assert temp_db.get_source(source.id).status == SourceStatus.COMPLETED


def test_ignored_descriptions_produce_no_transaction(
    temp_db, importer, source_service, sample_account, sample_categories
):
    source = _upload(source_service, sample_account, ACCOUNT_CSV)

    report = importer.run(source.id)

    assert report.count(RowOutcome.IGNORED) == 1
    assert "Pagamento recebido" not in _by_description(temp_db, sample_account.id)


def test_importing_same_file_twice_is_idempotent(
    temp_db, importer, source_service, sample_account, sample_categories
):
    first = _upload(source_service, sample_account, ACCOUNT_CSV)
    importer.run(first.id)
    before = {txn.checksum for txn in temp_db.list_transactions(account_id=sample_account.id)}

    second = _upload(source_service, sample_account, ACCOUNT_CSV)
    report = importer.run(second.id)
    after = {txn.checksum for txn in temp_db.list_transactions(account_id=sample_account.id)}

    assert before == after
    assert report.count(RowOutcome.IMPORTED) == 0
    assert report.count(RowOutcome.DUPLICATE) == 3


def test_rows_with_too_few_columns_are_skipped(temp_db, importer, source_service, sample_account):
    text = (
        "date,amount,description\n"
        "2025-03-01,-10.00,Coffee\n"
        "2025-03-02,-11.00,\n"
        ",,Orphan description\n"
        "2025-03-03\n"
    )
    source = _upload(source_service, sample_account, text)

    report = importer.run(source.id)

    assert report.rows_seen == 4
    assert report.count(RowOutcome.MALFORMED) == 3
    assert list(_by_description(temp_db, sample_account.id)) == ["Coffee"]


def test_unparseable_rows_are_skipped(temp_db, importer, source_service, sample_account):
    text = (
        "date,amount,description\n"
        "March 3rd,-10.00,Coffee\n"
        "2025-03-02,ten,Tea\n"
        "2025-03-04,-3.00,Water\n"
    )
    source = _upload(source_service, sample_account, text)

    report = importer.run(source.id)

    assert report.count(RowOutcome.MALFORMED) == 2
    assert list(_by_description(temp_db, sample_account.id)) == ["Water"]


def test_extra_columns_are_tolerated(temp_db, importer, source_service, sample_account):
    text = "date,id,amount,description\n2025-03-01,abc-1,-10.00,Coffee\n"
    source = _upload(source_service, sample_account, text)

    importer.run(source.id)

    assert _by_description(temp_db, sample_account.id)["Coffee"].amount == Decimal("-10.00")


def test_semicolon_delimited_file(temp_db, importer, source_service, sample_account):
    text = "date;amount;description\n01/03/2025;-5.50;Padaria\n02/03/2025;-6.00;Mercado\n"
    source = _upload(source_service, sample_account, text)

    importer.run(source.id)

    assert set(_by_description(temp_db, sample_account.id)) == {"Padaria", "Mercado"}


def test_rows_are_categorized_on_import(
    temp_db, importer, source_service, sample_account, sample_categories, make_rule
):
    rule_id = make_rule("ifood", sample_categories["Restaurants"])
    text = (
        "date,amount,description\n"
        "2025-03-02,-42.90,IFOOD *Restaurante Sabor\n"
        "2025-03-05,3500.00,Salary ACME\n"
        "2025-03-06,-20.00,Zzz Kwx\n"
    )
    source = _upload(source_service, sample_account, text)

    importer.run(source.id)

    txns = _by_description(temp_db, sample_account.id)
    food = txns["IFOOD *Restaurante Sabor"]
    assert food.category_id == sample_categories["Restaurants"]
    assert food.category_rule_id == rule_id
    assert food.category_score == 1.0

    income = txns["Salary ACME"]
    assert income.category_id == sample_categories["Income"]
    assert income.category_rule_id is None
    assert income.category_score == 0.0

    assert txns["Zzz Kwx"].category_id is None


def test_identical_rows_in_one_file_insert_once(temp_db, store, source_service, sample_account):
    text = "date,amount,description\n" + "2025-03-01,-9.99,Spotify\n" * 25
    source = _upload(source_service, sample_account, text)
    importer = ImporterService(temp_db, store, limiter=ConcurrencyLimiter(8))

    report = importer.run(source.id)

    assert report.count(RowOutcome.IMPORTED) == 1
    assert report.count(RowOutcome.DUPLICATE) == 24
    assert len(temp_db.list_transactions(account_id=sample_account.id)) == 1


def test_large_file_with_bounded_workers(temp_db, store, source_service, sample_account):
    lines = [f"2025-03-{(i % 28) + 1:02d},-{i}.25,Merchant {i}" for i in range(1, 121)]
    source = _upload(source_service, sample_account, "date,amount,description\n" + "\n".join(lines))
    importer = ImporterService(temp_db, store, limiter=ConcurrencyLimiter(6))

    assert importer.import_source(source.id) == 120
    assert len(temp_db.list_transactions(account_id=sample_account.id)) == 120


def test_missing_config_aborts_and_leaves_source_pending(
    temp_db, store, source_service, sample_account
):
    source = _upload(source_service, sample_account, CREDIT_CARD_CSV)
    detector = SourceTypeDetector(
        {SourceType.ACCOUNT_STATEMENT_CSV: SOURCE_TYPE_CONFIGS[SourceType.ACCOUNT_STATEMENT_CSV]}
    )
    importer = ImporterService(temp_db, store, detector=detector)

    with pytest.raises(ConfigurationError):
        importer.run(source.id)

    assert temp_db.get_source(source.id).status == SourceStatus.PENDING
    assert temp_db.list_transactions(account_id=sample_account.id) == []


def test_pending_source_can_be_reimported(temp_db, importer, store, source_service, sample_account):
    source = _upload(source_service, sample_account, CREDIT_CARD_CSV)

    importer.run(source.id)
    report = importer.run(source.id)

    assert report.count(RowOutcome.DUPLICATE) == 3
    assert len(temp_db.list_transactions(account_id=sample_account.id)) == 3


def test_unknown_source(importer):
    with pytest.raises(NotFoundError):
        importer.run(404)


def test_missing_stored_file(temp_db, importer, sample_account):
    source_id = temp_db.create_source(sample_account.id, SourceType.ACCOUNT_STATEMENT_CSV)

    with pytest.raises(NotFoundError):
        importer.run(source_id)

    assert temp_db.get_source(source_id).status == SourceStatus.PENDING


def test_comma_decimal_amounts_keep_their_cents(temp_db, importer, source_service, sample_account):
    text = (
        "date;amount;description\n"
        "01/03/2025;-117,51;Aluguel\n"
        "02/03/2025;-1.234,56;Escola\n"
        "03/03/2025;-12,3456;Garbled\n"
    )
    source = _upload(source_service, sample_account, text)

    report = importer.run(source.id)

    by_description = _by_description(temp_db, sample_account.id)
    assert by_description["Aluguel"].amount == Decimal("-117.51")
    assert by_description["Escola"].amount == Decimal("-1234.56")
    assert "Garbled" not in by_description
    assert report.count(RowOutcome.MALFORMED) == 1
