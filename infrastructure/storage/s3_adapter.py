"""
S3 Storage Adapter
==================

Product images on S3 (or MinIO) through django-storages.
"""

import logging
from typing import BinaryIO

from storages.backends.s3boto3 import S3Boto3Storage

from .interface import StorageException, StorageFile, StorageInterface

logger = logging.getLogger(__name__)


class S3StorageAdapter(StorageInterface):
    """
    Bucket, credentials, endpoint and custom domain all come from the
    ``AWS_*`` settings that S3Boto3Storage reads.
    """

    def __init__(self):
        self.storage = S3Boto3Storage()

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            key = self.storage.save(path, file)
        except Exception as e:
            logger.error(f"S3 upload of {path} failed: {e}")
            raise StorageException(f"S3 upload failed: {e}") from e

        logger.info(f"Uploaded product image to S3: {key}")
        return StorageFile(key=key, content_type=content_type)

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                logger.warning(f"S3 object {key} already gone")
                return False
            self.storage.delete(key)
        except Exception as e:
            logger.error(f"S3 delete of {key} failed: {e}")
            raise StorageException(f"S3 deletion failed: {e}") from e

        logger.info(f"Deleted product image from S3: {key}")
        return True

    def get_url(self, key: str) -> str:
        # AWS_QUERYSTRING_AUTH decides between signed and public URLs
        try:
            return self.storage.url(key)
        except Exception as e:
            logger.error(f"No URL for S3 key {key}: {e}")
            raise StorageException(f"URL generation failed: {e}") from e
