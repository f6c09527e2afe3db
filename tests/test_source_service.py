"""Tests for statement upload."""

import pytest

from spendflix.domain.entities import SourceStatus, SourceType
from spendflix.domain.errors import (
    CompatibilityError,
    DetectionError,
    NotFoundError,
    ValidationError,
)
from spendflix.domain.source import source_object_key

from conftest import ACCOUNT_CSV, CREDIT_CARD_CSV


def test_upload_creates_pending_source_and_stores_file(
    source_service, store, sample_account
):
    content = CREDIT_CARD_CSV.encode("utf-8")

    source = source_service.upload(sample_account.id, content)

    assert source.status == SourceStatus.PENDING
    assert source.source_type == SourceType.CREDIT_CARD_STATEMENT_CSV
    assert source.account_id == sample_account.id
    assert store.get(source_object_key(source.id)) == content
    assert source_object_key(source.id) == f"{source.id}.csv"


def test_upload_accepts_bom(source_service, sample_account):
    content = b"\xef\xbb\xbf" + ACCOUNT_CSV.encode("utf-8")

    source = source_service.upload(sample_account.id, content)

    assert source.source_type == SourceType.ACCOUNT_STATEMENT_CSV


@pytest.mark.parametrize("content", [b"", b"   \n\n", b"date,amount,description\n", b"date,amount,description\n,,\n"])
def test_upload_rejects_empty_files(source_service, sample_account, content):
    with pytest.raises(ValidationError):
        source_service.upload(sample_account.id, content)
    assert source_service.list_sources() == []


def test_upload_rejects_unknown_headers(source_service, sample_account):
    with pytest.raises(DetectionError) as excinfo:
        source_service.upload(sample_account.id, b"foo,bar,baz\n1,2,3\n")
    assert "foo,bar,baz" in str(excinfo.value)
    assert source_service.list_sources() == []


def test_upload_rejects_incompatible_account(source_service, store, card_account):
    with pytest.raises(CompatibilityError):
        source_service.upload(card_account.id, ACCOUNT_CSV.encode("utf-8"))
    assert source_service.list_sources() == []
    assert list(store.root.iterdir()) == []


def test_upload_accepts_compatible_account(source_service, card_account):
    source = source_service.upload(card_account.id, CREDIT_CARD_CSV.encode("utf-8"))
    assert source.source_type == SourceType.CREDIT_CARD_STATEMENT_CSV


def test_upload_unknown_account(source_service):
    with pytest.raises(NotFoundError):
        source_service.upload(404, ACCOUNT_CSV.encode("utf-8"))


def test_list_and_complete_sources(source_service, sample_account):
    first = source_service.upload(sample_account.id, ACCOUNT_CSV.encode("utf-8"))
    second = source_service.upload(sample_account.id, CREDIT_CARD_CSV.encode("utf-8"))

    source_service.mark_completed(first.id)

    assert [s.id for s in source_service.list_sources()] == [second.id, first.id]
    pending = source_service.list_sources(status=SourceStatus.PENDING)
    assert [s.id for s in pending] == [second.id]
    assert source_service.get_source(first.id).status == SourceStatus.COMPLETED


def test_get_unknown_source(source_service):
    with pytest.raises(NotFoundError):
        source_service.get_source(12)


def test_read_content_returns_uploaded_bytes(source_service, sample_account):
    content = CREDIT_CARD_CSV.encode("utf-8")
    source = source_service.upload(sample_account.id, content)

    assert source_service.read_content(source.id) == content
    with pytest.raises(NotFoundError):
        source_service.read_content(source.id + 100)
