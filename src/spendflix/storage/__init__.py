"""Object storage for uploaded statement files."""

from spendflix.storage.base import ObjectStore
from spendflix.storage.local import LocalObjectStore

__all__ = ["ObjectStore", "LocalObjectStore"]
