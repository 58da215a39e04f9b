"""
CatalogService - product browsing and listing.

Handles the catalog view (active products filtered by query, category and
college), product detail, a seller's own listings, and creating listings
with images in object storage and an optional inline category.
"""

import logging
import os
import time
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from infrastructure.repositories import (
    ProductRecord,
    ProductRepository,
    ProfileRepository,
    RecordNotFound,
    RepositoryError,
)
from infrastructure.storage.interface import StorageException, StorageInterface
from marketplace.catalog.domain.services.catalog_filter import FilterSelection
from marketplace.catalog.domain.services.taxonomy_service import TaxonomyService
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)

MAX_PRICE = Decimal("99999999.99")
MAX_TITLE_LENGTH = 200


class CatalogService(BaseService):
    """
    Service for catalog operations.

    Responsibilities:
    - Browse active products with the catalog filter
    - Product detail and public image URLs
    - A seller's own listings (any status)
    - Create listings (images + optional inline category, rolled back together)
    """

    def __init__(
        self,
        products: ProductRepository,
        profiles: ProfileRepository,
        taxonomy: TaxonomyService,
        storage: StorageInterface,
    ):
        super().__init__()
        self.products = products
        self.profiles = profiles
        self.taxonomy = taxonomy
        self.storage = storage

    @BaseService.log_performance
    def browse(self, selection: FilterSelection, viewer_id: Optional[str] = None) -> ServiceResult[Dict[str, Any]]:
        """
        List active products newest first and apply the selection.

        When ``viewer_id`` is given and the viewer's profile loads, the
        selection's college may be seeded from it (see FilterSelection).

        Returns:
            ServiceResult with {"results", "count", "filters"}
        """
        if viewer_id:
            try:
                selection.seed_from_profile(self.profiles.get(viewer_id))
            except RepositoryError as e:
                # No profile, no default; the catalog still loads
                self.logger.info(f"Could not load profile for viewer {viewer_id}: {e}")

        try:
            products = self.products.list_active()
        except RepositoryError as e:
            self.logger.error(f"Failed to load products: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to load products")

        results = selection.apply(products)
        self.logger.info(f"Catalog: {len(results)}/{len(products)} products match {selection.as_dict()}")
        return service_ok({"results": results, "count": len(results), "filters": selection.as_dict()})

    def get_product(self, product_id: str) -> ServiceResult[ProductRecord]:
        try:
            return service_ok(self.products.get(product_id))
        except RecordNotFound:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} does not exist")
        except RepositoryError as e:
            self.logger.error(f"Failed to load product {product_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to load product")

    def list_seller_products(self, seller_id: str) -> ServiceResult[List[ProductRecord]]:
        return self.wrap_exception(lambda: self.products.list_by_seller(seller_id), ErrorCodes.DATABASE_ERROR)

    def image_urls(self, product: ProductRecord) -> List[str]:
        """Resolve public URLs for a product's images, skipping unresolvable ones."""
        urls = []
        for path in product.image_paths:
            try:
                urls.append(self.storage.get_url(path))
            except StorageException as e:
                self.logger.warning(f"Could not resolve image URL for {path}: {e}")
        return urls

    @BaseService.log_performance
    def create_product(
        self,
        seller_id: str,
        title: str,
        description: str,
        price,
        category_id: Optional[str] = None,
        new_category: Optional[str] = None,
        images: Iterable = (),
    ) -> ServiceResult[ProductRecord]:
        """
        Create a listing.

        Steps, undone in reverse if a later one fails:
        1. Resolve the category (existing id, or create ``new_category``)
        2. Upload images to ``<seller_id>/<timestamp>-<n>.<ext>``
        3. Insert the product
        """
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Title and description are required")
        if len(title) > MAX_TITLE_LENGTH:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Title is too long")

        price_result = self._parse_price(price)
        if not price_result.ok:
            return price_result
        if not category_id and not (new_category or "").strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "Please select or add a category")

        created_category = None
        if category_id:
            category_result = self.taxonomy.get_category(category_id)
            if not category_result.ok:
                return category_result
            category = category_result.value
        else:
            ensure_result = self.taxonomy.ensure_category(new_category)
            if not ensure_result.ok:
                return ensure_result
            category, created = ensure_result.value
            if created:
                created_category = category

        uploaded: List[str] = []
        try:
            for index, image in enumerate(images):
                stored = self.storage.upload(
                    image,
                    self._image_path(seller_id, image, index),
                    getattr(image, "content_type", None) or "application/octet-stream",
                )
                uploaded.append(stored.key)
        except StorageException as e:
            self.logger.error(f"Image upload failed for seller {seller_id}: {e}")
            self._rollback_listing(uploaded, created_category)
            return service_err(ErrorCodes.STORAGE_ERROR, "Failed to upload images")

        try:
            product = self.products.insert(
                seller_id=seller_id,
                title=title,
                description=description,
                price=price_result.value,
                category_id=category.id,
                image_paths=uploaded,
            )
        except RepositoryError as e:
            self.logger.error(f"Failed to insert product for seller {seller_id}: {e}")
            self._rollback_listing(uploaded, created_category)
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to list product")

        self.logger.info(f"Product {product.id} listed by {seller_id} with {len(uploaded)} images")
        return service_ok(product)

    def create_product_for(self, seller_id: str, **listing) -> ServiceResult[ProductRecord]:
        """Create a listing on behalf of another user (admin flow)."""
        try:
            self.profiles.get(seller_id)
        except RecordNotFound:
            return service_err(ErrorCodes.USER_NOT_FOUND, f"User {seller_id} does not exist")
        except RepositoryError as e:
            self.logger.error(f"Failed to load seller {seller_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to load seller")
        return self.create_product(seller_id, **listing)

    @staticmethod
    def _parse_price(price) -> ServiceResult[Decimal]:
        if price is None or price == "":
            return service_err(ErrorCodes.VALIDATION_ERROR, "Price is required")
        try:
            value = Decimal(str(price))
        except (InvalidOperation, ValueError):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid price: {price}")
        if not value.is_finite() or value < 0:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Price must be a non-negative number")
        if value > MAX_PRICE:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Price is too large")
        return service_ok(value.quantize(Decimal("0.01")))

    @staticmethod
    def _image_path(seller_id: str, image, index: int) -> str:
        _, ext = os.path.splitext(getattr(image, "name", "") or "")
        ext = ext.lstrip(".").lower() or "jpg"
        return f"{seller_id}/{int(time.time() * 1000)}-{index}.{ext}"

    def _rollback_listing(self, uploaded: List[str], created_category) -> None:
        """Remove uploaded images and an inline-created category."""
        self.logger.warning(
            f"Rolling back listing: {len(uploaded)} images, category={getattr(created_category, 'id', None)}"
        )
        for key in uploaded:
            try:
                self.storage.delete(key)
            except StorageException as e:
                self.logger.error(f"Failed to delete image during rollback: key={key}, error={e}")

        if created_category is not None:
            discard_result = self.taxonomy.discard_category(created_category.id)
            if not discard_result.ok:
                self.logger.error(
                    f"Failed to discard category during rollback: id={created_category.id}, "
                    f"error={discard_result.error}"
                )
