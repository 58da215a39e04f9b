"""
Storage Factory
===============

Creates the configured storage backend.
"""

import logging
from typing import Optional

from django.conf import settings

from .interface import StorageInterface
from .local_adapter import LocalStorageAdapter
from .s3_adapter import S3StorageAdapter

logger = logging.getLogger(__name__)


class StorageFactory:
    """
    Factory for storage backends.

    The backend comes from INFRASTRUCTURE["STORAGE_BACKEND"] ("s3" or "local").

    Usage:
        storage = StorageFactory.create()
    """

    @staticmethod
    def create(backend: Optional[str] = None) -> StorageInterface:
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("STORAGE_BACKEND", "s3")

        if backend_type == "local":
            logger.info("Creating local filesystem storage backend")
            return LocalStorageAdapter()

        if backend_type != "s3":
            raise ValueError(f"Unknown storage backend: {backend_type}")

        logger.info("Creating S3/MinIO storage backend")
        return S3StorageAdapter()
