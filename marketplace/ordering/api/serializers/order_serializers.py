from rest_framework import serializers

from marketplace.ordering.domain.lifecycle import ORDER_STATUSES


class OrderSerializer(serializers.Serializer):
    """Order payload built from an OrderRecord, with product and buyer contact"""

    id = serializers.CharField()
    product_id = serializers.CharField()
    product_title = serializers.CharField()
    product_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    buyer_id = serializers.CharField()
    buyer_name = serializers.CharField()
    buyer_mobile = serializers.CharField()
    buyer_college = serializers.CharField()
    seller_id = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    delivery_address = serializers.CharField()
    status = serializers.CharField()
    allowed_statuses = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(allow_null=True)

    def get_allowed_statuses(self, obj):
        return list(ORDER_STATUSES)


class PlaceOrderSerializer(serializers.Serializer):
    """Request body for buying a product"""

    product_id = serializers.UUIDField(help_text="Product to buy")
    delivery_address = serializers.CharField(help_text="Free-text delivery address")


class OrderStatusUpdateSerializer(serializers.Serializer):
    """Request body for a seller changing an order's status"""

    # Plain CharField: unknown values reach the service and come back as invalid_order_status
    status = serializers.CharField(help_text=f"One of: {', '.join(ORDER_STATUSES)}")
