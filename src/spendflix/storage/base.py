"""Abstract object storage interface."""

from abc import ABC, abstractmethod


class ObjectStore(ABC):
    """Keyed blob storage for uploaded statement files."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the bytes stored under key.

        Raises:
            NotFoundError: If nothing is stored under key
        """
        pass

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str = "text/csv") -> None:
        """Store bytes under key, replacing any previous object."""
        pass
