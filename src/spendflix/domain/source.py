"""Statement upload and source bookkeeping."""

import logging
from typing import Optional

from spendflix.database.base import Database
from spendflix.domain.csv_reader import read_statement
from spendflix.domain.entities import Source, SourceStatus
from spendflix.domain.errors import NotFoundError, account_not_found, source_not_found
from spendflix.domain.source_types import SourceTypeDetector
from spendflix.storage.base import ObjectStore

logger = logging.getLogger(__name__)


def source_object_key(source_id: int) -> str:
    """Return the object-store key holding a source's raw file."""
    return f"{source_id}.csv"


class SourceService:
    """Accepts uploaded statement files and tracks their processing state."""

    def __init__(
        self,
        db: Database,
        store: ObjectStore,
        detector: Optional[SourceTypeDetector] = None,
    ):
        """Initialize source service.

        Args:
            db: Database instance
            store: Object store receiving the raw files
            detector: Source type detector; defaults to the built-in types
        """
        self.db = db
        self.store = store
        self.detector = detector if detector is not None else SourceTypeDetector()

    def upload(self, account_id: int, content: bytes, content_type: str = "text/csv") -> Source:
        """Validate a statement file, create its Source and store the bytes.

        Nothing is written unless the file has a header row and data, its
        headers identify a known source type and that type suits the account.

        Args:
            account_id: Account the statement belongs to
            content: Raw file bytes
            content_type: MIME type passed to the object store

        Returns:
            The new PENDING Source

        Raises:
            ValidationError: If the file is empty or has no header row
            NotFoundError: If the account doesn't exist
            DetectionError: If the headers match no source type
            CompatibilityError: If the account expects another source type
        """
        headers, _ = read_statement(content)

        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        config = self.detector.detect(headers)
        logger.debug("Detected %s for headers %s", config.source_type.value, headers)
        self.detector.check_compatible(account, config)

        source_id = self.db.create_source(account_id, config.source_type)
        self.store.put(source_object_key(source_id), content, content_type)
        logger.info(
            "Created source %s (%s) for account %s",
            source_id,
            config.source_type.value,
            account_id,
        )
        return self.db.get_source(source_id)

    def get_source(self, source_id: int) -> Source:
        """Get source by ID.

        Raises:
            NotFoundError: If source doesn't exist
        """
        source = self.db.get_source(source_id)
        if source is None:
            raise NotFoundError(source_not_found(source_id))
        return source

    def list_sources(
        self, account_id: Optional[int] = None, status: Optional[SourceStatus] = None
    ) -> list[Source]:
        """List sources, newest first."""
        return self.db.list_sources(account_id=account_id, status=status)

    def read_content(self, source_id: int) -> bytes:
        """Fetch a source's raw file from the object store."""
        return self.store.get(source_object_key(source_id))

    def mark_completed(self, source_id: int) -> None:
        """Record that every row of the source has been processed."""
        self.db.update_source_status(source_id, SourceStatus.COMPLETED)
