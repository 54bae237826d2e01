"""Abstract object storage interface (port) for uploaded attachments."""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Port for blob storage — implemented in the infrastructure layer."""

    @abstractmethod
    async def upload(self, path: str, content: bytes) -> str:
        """Store ``content`` under ``path`` and return a retrievable URL."""
        ...

    @abstractmethod
    async def download(self, path: str) -> bytes:
        """Return the bytes stored under ``path``."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Delete a stored object. Returns True if deleted, False if not found."""
        ...
