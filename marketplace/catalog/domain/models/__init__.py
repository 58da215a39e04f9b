from .catalog import PRODUCT_ACTIVE, PRODUCT_SOLD, Product
from .category import Category, College


__all__ = [
    "Product",
    "Category",
    "College",
    "PRODUCT_ACTIVE",
    "PRODUCT_SOLD",
]
