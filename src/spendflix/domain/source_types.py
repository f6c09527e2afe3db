"""Statement schemas and header-based source type detection."""

import re
from dataclasses import dataclass, field
from typing import Optional

from spendflix.domain.entities import Account, SourceType
from spendflix.domain.errors import (
    CompatibilityError,
    ConfigurationError,
    DetectionError,
    ValidationError,
    incompatible_source_type,
    undetectable_headers,
    unknown_source_type,
)

# Rows whose description matches one of these are card payments and
# balance carry-overs, which would otherwise be counted twice.
DEFAULT_IGNORED_DESCRIPTIONS = (
    r"pagamento recebido",
    r"payment received",
    r"pagamento de fatura",
    r"invoice payment",
    r"saldo anterior",
    r"previous balance",
)


@dataclass(frozen=True)
class HeaderMapping:
    """Column names holding the date, amount and description of a row."""

    date: str
    amount: str
    description: str

    def columns(self) -> tuple[str, str, str]:
        return (self.date, self.amount, self.description)


@dataclass(frozen=True)
class SourceTypeConfig:
    """Column mapping and row filters for one bank file shape.

    Patterns are compiled on construction so a bad regex fails at import
    time of this module rather than in the middle of a batch.
    """

    source_type: SourceType
    header_mapping: HeaderMapping
    invert_amount_signal: bool = False
    ignored_description_patterns: tuple[str, ...] = DEFAULT_IGNORED_DESCRIPTIONS
    _compiled: tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        columns = [c.strip() for c in self.header_mapping.columns()]
        if any(not c for c in columns):
            raise ValidationError(
                f"Source type {self.source_type.value} maps an empty column name"
            )
        if len(set(columns)) != len(columns):
            raise ValidationError(
                f"Source type {self.source_type.value} maps the same column twice"
            )
        compiled = tuple(
            re.compile(pattern, re.IGNORECASE) for pattern in self.ignored_description_patterns
        )
        object.__setattr__(self, "_compiled", compiled)

    @property
    def header_key(self) -> str:
        return header_key(self.header_mapping.columns())

    def is_ignored(self, description: str) -> bool:
        """Return True when the description matches an ignore pattern."""
        return any(pattern.search(description) for pattern in self._compiled)


SOURCE_TYPE_CONFIGS: dict[SourceType, SourceTypeConfig] = {
    SourceType.ACCOUNT_STATEMENT_CSV: SourceTypeConfig(
        source_type=SourceType.ACCOUNT_STATEMENT_CSV,
        header_mapping=HeaderMapping(date="date", amount="amount", description="description"),
        invert_amount_signal=False,
    ),
    SourceType.CREDIT_CARD_STATEMENT_CSV: SourceTypeConfig(
        source_type=SourceType.CREDIT_CARD_STATEMENT_CSV,
        header_mapping=HeaderMapping(date="date", amount="amount", description="title"),
        invert_amount_signal=True,
    ),
}


def header_key(headers) -> str:
    """Build the lookup key for a set of header names."""
    return "|".join(sorted({h.strip() for h in headers}))


class SourceTypeDetector:
    """Infers which SourceTypeConfig a file uses from its header row."""

    def __init__(self, configs: Optional[dict[SourceType, SourceTypeConfig]] = None):
        """Initialize the detector.

        Args:
            configs: Known configs keyed by type; defaults to the built-in set
        """
        self.configs = configs if configs is not None else SOURCE_TYPE_CONFIGS
        self._by_key: dict[str, SourceTypeConfig] = {}
        for config in self.configs.values():
            # First config registered for a key wins
            self._by_key.setdefault(config.header_key, config)
        self._known_columns = {
            column for config in self.configs.values() for column in config.header_mapping.columns()
        }

    def detect(self, headers: list[str]) -> SourceTypeConfig:
        """Return the config whose mapped headers the file carries.

        Columns that no config maps (identifiers, balances) are not part of
        the key, so a file matches only when its mapped columns are exactly
        one config's three headers.

        Raises:
            DetectionError: If no config matches; message lists the headers
        """
        mapped = [h for h in headers if h.strip() in self._known_columns]
        config = self._by_key.get(header_key(mapped)) if mapped else None
        if config is None:
            raise DetectionError(undetectable_headers(headers))
        return config

    def check_compatible(self, account: Account, config: SourceTypeConfig) -> None:
        """Reject a file whose type differs from the account's expected type.

        Accounts without an expected type accept any detected type.

        Raises:
            CompatibilityError: If the types differ
        """
        if account.source_type is None or account.source_type == config.source_type:
            return
        raise CompatibilityError(
            incompatible_source_type(
                getattr(account.source_type, "value", account.source_type),
                config.source_type.value,
            )
        )

    def get_config(self, source_type: SourceType | str, source_id: int) -> SourceTypeConfig:
        """Resolve the config for a stored source.

        Raises:
            ConfigurationError: If the source type has no config
        """
        try:
            return self.configs[SourceType(source_type)]
        except (KeyError, ValueError):
            raise ConfigurationError(
                unknown_source_type(source_id, getattr(source_type, "value", source_type))
            ) from None
