# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    CatalogFiltersSerializer,
    CatalogResponseSerializer,
    ErrorResponseSerializer,
    OrderStatusUpdateResponseSerializer,
    PlaceOrderResponseSerializer,
)


__all__ = [
    # Response serializers for documentation
    "ErrorResponseSerializer",
    "CatalogFiltersSerializer",
    "CatalogResponseSerializer",
    "PlaceOrderResponseSerializer",
    "OrderStatusUpdateResponseSerializer",
]
