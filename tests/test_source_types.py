"""Tests for source type configs and header detection."""

from datetime import datetime

import pytest

from spendflix.domain.entities import Account, SourceType
from spendflix.domain.errors import (
    CompatibilityError,
    ConfigurationError,
    DetectionError,
    ValidationError,
)
from spendflix.domain.source_types import (
    HeaderMapping,
    SOURCE_TYPE_CONFIGS,
    SourceTypeConfig,
    SourceTypeDetector,
    header_key,
)


def _account(source_type=None):
    return Account(
        id=1,
        user_id=1,
        name="Checking",
        bank_number=None,
        source_type=source_type,
        created_at=datetime(2025, 1, 1),
    )


def test_header_key_is_order_independent():
    assert header_key(["title", "date", "amount"]) == header_key(["amount", "date", "title"])
    assert header_key([" date ", "amount", "title"]) == "amount|date|title"


def test_detect_account_statement():
    config = SourceTypeDetector().detect(["date", "amount", "description"])
    assert config.source_type == SourceType.ACCOUNT_STATEMENT_CSV
    assert config.invert_amount_signal is False


def test_detect_credit_card_statement_in_any_order():
    config = SourceTypeDetector().detect(["title", "amount", "date"])
    assert config.source_type == SourceType.CREDIT_CARD_STATEMENT_CSV
    assert config.invert_amount_signal is True


def test_detect_ignores_unmapped_columns():
    config = SourceTypeDetector().detect(["date", "id", "amount", "description", "balance"])
    assert config.source_type == SourceType.ACCOUNT_STATEMENT_CSV


def test_detect_unknown_headers_names_them():
    with pytest.raises(DetectionError) as excinfo:
        SourceTypeDetector().detect(["foo", "bar", "baz"])
    assert "foo,bar,baz" in str(excinfo.value)


def test_detect_partial_mapping_fails():
    with pytest.raises(DetectionError):
        SourceTypeDetector().detect(["date", "amount"])


def test_detect_ambiguous_headers_fails():
    with pytest.raises(DetectionError):
        SourceTypeDetector().detect(["date", "amount", "description", "title"])


def test_check_compatible_accepts_any_when_account_has_no_type():
    detector = SourceTypeDetector()
    config = SOURCE_TYPE_CONFIGS[SourceType.CREDIT_CARD_STATEMENT_CSV]
    detector.check_compatible(_account(), config)


def test_check_compatible_accepts_matching_type():
    detector = SourceTypeDetector()
    config = SOURCE_TYPE_CONFIGS[SourceType.CREDIT_CARD_STATEMENT_CSV]
    detector.check_compatible(_account(SourceType.CREDIT_CARD_STATEMENT_CSV), config)


def test_check_compatible_rejects_other_type():
    detector = SourceTypeDetector()
    config = SOURCE_TYPE_CONFIGS[SourceType.ACCOUNT_STATEMENT_CSV]
    with pytest.raises(CompatibilityError) as excinfo:
        detector.check_compatible(_account(SourceType.CREDIT_CARD_STATEMENT_CSV), config)
    message = str(excinfo.value)
    assert "CREDIT_CARD_STATEMENT_CSV" in message
    assert "ACCOUNT_STATEMENT_CSV" in message


def test_get_config_resolves_stored_value():
    detector = SourceTypeDetector()
    config = detector.get_config("ACCOUNT_STATEMENT_CSV", source_id=3)
    assert config is SOURCE_TYPE_CONFIGS[SourceType.ACCOUNT_STATEMENT_CSV]


def test_get_config_unknown_type_raises_configuration_error():
    with pytest.raises(ConfigurationError) as excinfo:
        SourceTypeDetector().get_config("BANK_XYZ_OFX", source_id=7)
    assert "BANK_XYZ_OFX" in str(excinfo.value)
    assert "7" in str(excinfo.value)


def test_get_config_missing_from_registry_raises_configuration_error():
    detector = SourceTypeDetector(
        {SourceType.ACCOUNT_STATEMENT_CSV: SOURCE_TYPE_CONFIGS[SourceType.ACCOUNT_STATEMENT_CSV]}
    )
    with pytest.raises(ConfigurationError):
        detector.get_config(SourceType.CREDIT_CARD_STATEMENT_CSV, source_id=1)


@pytest.mark.parametrize(
    "description",
    ["Pagamento recebido", "PAYMENT RECEIVED - THANK YOU", "Saldo anterior", "Invoice payment 03/25"],
)
def test_default_ignore_patterns(description):
    config = SOURCE_TYPE_CONFIGS[SourceType.ACCOUNT_STATEMENT_CSV]
    assert config.is_ignored(description)


def test_regular_description_not_ignored():
    config = SOURCE_TYPE_CONFIGS[SourceType.CREDIT_CARD_STATEMENT_CSV]
    assert not config.is_ignored("Uber* Trip")


def test_config_rejects_duplicate_columns():
    with pytest.raises(ValidationError):
        SourceTypeConfig(
            source_type=SourceType.ACCOUNT_STATEMENT_CSV,
            header_mapping=HeaderMapping(date="date", amount="date", description="memo"),
        )


def test_config_rejects_empty_column():
    with pytest.raises(ValidationError):
        SourceTypeConfig(
            source_type=SourceType.ACCOUNT_STATEMENT_CSV,
            header_mapping=HeaderMapping(date="date", amount=" ", description="memo"),
        )


def test_config_is_immutable():
    config = SOURCE_TYPE_CONFIGS[SourceType.ACCOUNT_STATEMENT_CSV]
    with pytest.raises(AttributeError):
        config.invert_amount_signal = True
