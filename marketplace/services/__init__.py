"""
Marketplace Service Layer

Services:
- CatalogService: catalog browsing, product detail, listing creation
- TaxonomyService: categories and colleges, created ad hoc
- OrderService: placing orders and order status updates

Usage:
    from infrastructure.container import container

    result = container.catalog_service().browse(FilterSelection.from_params(request.query_params))
    if result.ok:
        products = result.value["results"]
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    "BaseService",
    "ServiceResult",
    "service_ok",
    "service_err",
    "ErrorCodes",
    "CatalogService",
    "TaxonomyService",
    "OrderService",
]


def __getattr__(name):
    # Domain services import this package for their base classes
    if name == "CatalogService":
        from marketplace.catalog.domain.services.catalog_service import CatalogService

        return CatalogService
    if name == "TaxonomyService":
        from marketplace.catalog.domain.services.taxonomy_service import TaxonomyService

        return TaxonomyService
    if name == "OrderService":
        from marketplace.ordering.domain.services.order_service import OrderService

        return OrderService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
