"""
Local Storage Adapter
=====================

Product images under MEDIA_ROOT, served from MEDIA_URL. Used in
development and tests when S3 is disabled.
"""

import logging
from typing import BinaryIO

from django.core.files.storage import FileSystemStorage

from .interface import StorageException, StorageFile, StorageInterface

logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageInterface):
    def __init__(self, location: str = None, base_url: str = None):
        self.storage = FileSystemStorage(location=location, base_url=base_url)

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            key = self.storage.save(path, file)
        except OSError as e:
            logger.error(f"Local write of {path} failed: {e}")
            raise StorageException(f"Local upload failed: {e}") from e
        logger.info(f"Stored product image locally: {key}")
        return StorageFile(key=key, content_type=content_type)

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                return False
            self.storage.delete(key)
        except OSError as e:
            raise StorageException(f"Local deletion failed: {e}") from e
        return True

    def get_url(self, key: str) -> str:
        try:
            return self.storage.url(key)
        except ValueError as e:
            raise StorageException(f"URL generation failed: {e}") from e
