from .catalog_filter import ALL, FilterSelection, filter_products
from .catalog_service import CatalogService
from .taxonomy_service import TaxonomyService


__all__ = [
    "ALL",
    "FilterSelection",
    "filter_products",
    "CatalogService",
    "TaxonomyService",
]
