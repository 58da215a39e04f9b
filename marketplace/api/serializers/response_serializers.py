"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderSerializer

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    code = serializers.CharField(help_text="Error code identifier", required=False)


# ===== Catalog Response Serializers =====


class CatalogFiltersSerializer(serializers.Serializer):
    """Filter values actually applied, after the college default"""

    q = serializers.CharField(help_text="Free-text query (title or description)")
    category = serializers.CharField(help_text="Category id or 'all'")
    college = serializers.CharField(help_text="Seller college name or 'all'")


class CatalogResponseSerializer(serializers.Serializer):
    """Filtered catalog"""

    count = serializers.IntegerField(help_text="Number of matching products")
    filters = CatalogFiltersSerializer()
    results = ProductSerializer(many=True)


# ===== Order Response Serializers =====


class PlaceOrderResponseSerializer(serializers.Serializer):
    order = OrderSerializer()
    product_marked_sold = serializers.BooleanField(
        help_text="False when the order was stored but the product could not be marked sold"
    )


class OrderStatusUpdateResponseSerializer(serializers.Serializer):
    order = OrderSerializer(help_text="The updated order")
    seller_orders = OrderSerializer(many=True, help_text="The seller's orders, reloaded after the update")
