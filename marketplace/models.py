from marketplace.catalog.domain.models import Category, College, Product
from marketplace.ordering.domain.models import Order


__all__ = [
    "Category",
    "College",
    "Product",
    "Order",
]
