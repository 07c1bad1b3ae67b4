"""Blob storage port (abstract interface) for product images."""

from abc import ABC, abstractmethod


class BlobStorage(ABC):
    """Abstract blob storage interface."""

    @abstractmethod
    def upload(self, content: bytes, path: str) -> str:
        """Store `content` at `path` and return its public URL."""
        ...
