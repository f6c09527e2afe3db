"""Statement import: turns a stored source file into transactions."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.categorizer import Categorizer
from spendflix.domain.checksum import calculate_checksum
from spendflix.domain.csv_reader import populated_cell_count, read_statement
from spendflix.domain.entities import NewTransaction, Source, SourceStatus
from spendflix.domain.errors import ConfigurationError, NotFoundError, source_not_found
from spendflix.domain.source import source_object_key
from spendflix.domain.source_types import SourceTypeConfig, SourceTypeDetector
from spendflix.storage.base import ObjectStore
from spendflix.utils.amount_parser import parse_amount
from spendflix.utils.concurrency import ConcurrencyLimiter
from spendflix.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

MIN_POPULATED_COLUMNS = 3
DEFAULT_CONCURRENCY = 4


class RowOutcome(str, Enum):
    """What happened to one data row."""

    IMPORTED = "imported"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    MALFORMED = "malformed"


@dataclass
class ImportReport:
    """Per-outcome tally of one import run."""

    source_id: int
    outcomes: Counter = field(default_factory=Counter)

    @property
    def rows_seen(self) -> int:
        return sum(self.outcomes.values())

    def count(self, outcome: RowOutcome) -> int:
        return self.outcomes[outcome]


class ImporterService:
    """Imports the rows of an uploaded statement with bounded parallelism."""

    def __init__(
        self,
        db: Database,
        store: ObjectStore,
        detector: Optional[SourceTypeDetector] = None,
        categorizer: Optional[Categorizer] = None,
        limiter: Optional[ConcurrencyLimiter] = None,
    ):
        """Initialize importer.

        Args:
            db: Database instance
            store: Object store holding the uploaded files
            detector: Resolves a source's type to its config
            categorizer: Assigns categories to new transactions
            limiter: Worker pool bounding concurrent rows
        """
        self.db = db
        self.store = store
        self.detector = detector if detector is not None else SourceTypeDetector()
        self.categorizer = categorizer if categorizer is not None else Categorizer(db)
        self.limiter = limiter if limiter is not None else ConcurrencyLimiter(DEFAULT_CONCURRENCY)

    def import_source(self, source_id: int) -> int:
        """Import a source and return the number of data rows seen.

        Duplicate, ignored and malformed rows count as seen; they just
        produce no transaction.
        """
        return self.run(source_id).rows_seen

    def run(self, source_id: int) -> ImportReport:
        """Import every row of a source and mark it COMPLETED.

        Args:
            source_id: Source to import

        Returns:
            ImportReport with per-outcome counts

        Raises:
            NotFoundError: If the source or its stored file doesn't exist
            ConfigurationError: If the source's type has no config; the
                source stays PENDING and no row is processed
            ValidationError: If the stored file is empty or unreadable
        """
        source = self.db.get_source(source_id)
        if source is None:
            raise NotFoundError(source_not_found(source_id))

        try:
            config = self.detector.get_config(source.source_type, source.id)
        except ConfigurationError:
            logger.error(
                "Aborting import of source %s: no config for source type %s",
                source.id,
                source.source_type,
            )
            raise

        logger.info("Started importing source %s (%s)", source.id, config.source_type.value)
        _, rows = read_statement(self.store.get(source_object_key(source.id)))

        outcomes = self.limiter.run(
            (lambda row=row: self._run_row(row, source, config)) for row in rows
        )
        report = ImportReport(source_id=source.id, outcomes=Counter(outcomes))

        self.db.update_source_status(source.id, SourceStatus.COMPLETED)
        logger.info(
            "Finished importing source %s: %d rows, %d imported, %d duplicate, %d ignored, %d malformed",
            source.id,
            report.rows_seen,
            report.count(RowOutcome.IMPORTED),
            report.count(RowOutcome.DUPLICATE),
            report.count(RowOutcome.IGNORED),
            report.count(RowOutcome.MALFORMED),
        )
        return report

    def _run_row(self, row: dict, source: Source, config: SourceTypeConfig) -> RowOutcome:
        try:
            return self._process_row(row, source, config)
        finally:
            # Workers are pool threads; drop their session once the row settles
            self.db.disconnect()

    def _process_row(self, row: dict, source: Source, config: SourceTypeConfig) -> RowOutcome:
        """Normalize, deduplicate, categorize and persist one row."""
        if populated_cell_count(row) < MIN_POPULATED_COLUMNS:
            logger.debug("Source %s: skipping row with too few columns: %s", source.id, row)
            return RowOutcome.MALFORMED

        mapping = config.header_mapping
        description = (row.get(mapping.description) or "").strip()
        try:
            txn_date = parse_statement_date(row.get(mapping.date) or "")
            amount = parse_amount(row.get(mapping.amount) or "")
        except ValueError as e:
            logger.debug("Source %s: skipping unparseable row: %s", source.id, e)
            return RowOutcome.MALFORMED
        if not description:
            logger.debug("Source %s: skipping row without description", source.id)
            return RowOutcome.MALFORMED

        if config.invert_amount_signal:
            amount = -amount

        if config.is_ignored(description):
            logger.debug("Source %s: ignoring '%s'", source.id, description)
            return RowOutcome.IGNORED

        checksum = calculate_checksum(source.account_id, txn_date, description, amount)
        if self.db.transaction_exists(checksum):
            return RowOutcome.DUPLICATE

        match = self.categorizer.categorize(description, source.account_id, amount)
        transaction = NewTransaction(
            account_id=source.account_id,
            source_id=source.id,
            date=txn_date,
            description=description,
            amount=amount,
            checksum=checksum,
            category_id=match.category_id if match else None,
            category_rule_id=match.category_rule_id if match else None,
            category_score=match.score if match else None,
        )
        # A concurrent worker may insert the same checksum first
        if self.db.insert_transaction(transaction) is None:
            return RowOutcome.DUPLICATE
        return RowOutcome.IMPORTED
