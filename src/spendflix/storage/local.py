"""Filesystem-backed object store."""

import logging
import os
import tempfile
from pathlib import Path

from spendflix.domain.errors import NotFoundError, ValidationError
from spendflix.storage.base import ObjectStore

logger = logging.getLogger(__name__)


class LocalObjectStore(ObjectStore):
    """Stores each object as a file named after its key under a root directory.

    The content type is not persisted; files are served back as raw bytes.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValidationError(f"Invalid object key: '{key}'")
        return self.root / key

    def get(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise NotFoundError(f"Object '{key}' not found") from None

    def put(self, key: str, data: bytes, content_type: str = "text/csv") -> None:
        path = self._path(key)
        # Write then rename so readers never see a partial file
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Stored %d bytes at %s (%s)", len(data), path, content_type)
