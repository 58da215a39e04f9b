"""
Dependency Injection Container
================================

Simple service locator pattern for managing infrastructure dependencies
and the services built on them. Services receive their repositories and
storage through their constructors; the container is the one place that
wires concrete adapters in.

Usage:
    from infrastructure.container import container

    storage = container.storage()
    orders = container.order_service()
"""

import logging
from typing import Optional

from .storage import StorageFactory, StorageInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    Singleton: every ``ServiceContainer()`` call returns the same object.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._clear()
            self._initialized = True
            logger.info("Service container initialized")

    def _clear(self):
        self._storage: Optional[StorageInterface] = None

        # Repositories
        self._profile_repository = None
        self._category_repository = None
        self._college_repository = None
        self._product_repository = None
        self._order_repository = None
        self._role_repository = None

        # Domain Services
        self._taxonomy_service = None
        self._catalog_service = None
        self._order_service = None
        self._auth_service = None
        self._profile_service = None
        self._role_service = None

    def storage(self, backend: Optional[str] = None) -> StorageInterface:
        """
        Get storage service instance.

        Args:
            backend: Storage backend type ('s3' or 'local')
                    If None, uses configuration from settings

        Returns:
            StorageInterface implementation (cached)
        """
        if self._storage is None or backend is not None:
            self._storage = StorageFactory.create(backend)
            logger.debug(f"Created storage service: {type(self._storage).__name__}")

        return self._storage

    # ------------------------------------------------------------------
    # Repositories (Django ORM adapter, imported lazily: it loads models)
    # ------------------------------------------------------------------

    def profile_repository(self):
        if self._profile_repository is None:
            from .repositories.django_adapter import DjangoProfileRepository

            self._profile_repository = DjangoProfileRepository()
        return self._profile_repository

    def category_repository(self):
        if self._category_repository is None:
            from .repositories.django_adapter import DjangoCategoryRepository

            self._category_repository = DjangoCategoryRepository()
        return self._category_repository

    def college_repository(self):
        if self._college_repository is None:
            from .repositories.django_adapter import DjangoCollegeRepository

            self._college_repository = DjangoCollegeRepository()
        return self._college_repository

    def product_repository(self):
        if self._product_repository is None:
            from .repositories.django_adapter import DjangoProductRepository

            self._product_repository = DjangoProductRepository()
        return self._product_repository

    def order_repository(self):
        if self._order_repository is None:
            from .repositories.django_adapter import DjangoOrderRepository

            self._order_repository = DjangoOrderRepository()
        return self._order_repository

    def role_repository(self):
        if self._role_repository is None:
            from .repositories.django_adapter import DjangoRoleRepository

            self._role_repository = DjangoRoleRepository()
        return self._role_repository

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def taxonomy_service(self):
        """Get TaxonomyService instance."""
        if self._taxonomy_service is None:
            from marketplace.services import TaxonomyService

            self._taxonomy_service = TaxonomyService(
                categories=self.category_repository(), colleges=self.college_repository()
            )
            logger.debug("Created TaxonomyService")
        return self._taxonomy_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.services import CatalogService

            self._catalog_service = CatalogService(
                products=self.product_repository(),
                profiles=self.profile_repository(),
                taxonomy=self.taxonomy_service(),
                storage=self.storage(),
            )
            logger.debug("Created CatalogService")
        return self._catalog_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.services import OrderService

            self._order_service = OrderService(orders=self.order_repository(), products=self.product_repository())
            logger.debug("Created OrderService")
        return self._order_service

    def auth_service(self):
        """Get AuthService instance."""
        if self._auth_service is None:
            from authentication.domain.services import AuthService

            self._auth_service = AuthService(profiles=self.profile_repository(), taxonomy=self.taxonomy_service())
            logger.debug("Created AuthService")
        return self._auth_service

    def profile_service(self):
        """Get ProfileService instance."""
        if self._profile_service is None:
            from authentication.domain.services import ProfileService

            self._profile_service = ProfileService(profiles=self.profile_repository(), taxonomy=self.taxonomy_service())
            logger.debug("Created ProfileService")
        return self._profile_service

    def role_service(self):
        """Get RoleService instance."""
        if self._role_service is None:
            from authentication.domain.services import RoleService

            self._role_service = RoleService(profiles=self.profile_repository(), roles=self.role_repository())
            logger.debug("Created RoleService")
        return self._role_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._clear()
        logger.info("Service container reset")

    def configure_for_testing(self):
        """
        Configure container for tests.

        Sets up local filesystem storage instead of S3. Services are rebuilt
        lazily on top of it.
        """
        self._clear()
        self._storage = StorageFactory.create("local")
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()

