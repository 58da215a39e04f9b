"""
Product image store.

Listings keep only the storage key of each image; public URLs are
resolved when a listing is read.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


@dataclass(frozen=True)
class StorageFile:
    """An uploaded image. ``key`` is what goes into ``Product.image_paths``."""

    key: str
    content_type: str


class StorageInterface(ABC):
    """
    Upload by key, delete by key, resolve a key to a public URL.

    Implementations:
        - S3StorageAdapter: S3 / MinIO through django-storages
        - LocalStorageAdapter: MEDIA_ROOT, for development and tests
    """

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        """
        Store ``file`` under ``path``.

        The backend may alter the key to avoid overwriting an existing
        object, so callers must keep the returned ``StorageFile.key``.

        Raises:
            StorageException: If the upload fails
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a stored image.

        Returns:
            False when nothing was stored under ``key``

        Raises:
            StorageException: If the backend rejects the deletion
        """

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Raises StorageException when no URL can be produced."""


class StorageException(Exception):
    """An upload, deletion or URL lookup failed in the backend."""
