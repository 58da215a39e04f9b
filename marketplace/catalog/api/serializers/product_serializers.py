import logging

from rest_framework import serializers

from marketplace.catalog.domain.services.catalog_service import MAX_PRICE, MAX_TITLE_LENGTH
from marketplace.catalog.domain.services.taxonomy_service import MAX_NAME_LENGTH


logger = logging.getLogger(__name__)

MAX_IMAGES = 10


class ProductSerializer(serializers.Serializer):
    """
    Product card / detail payload built from a ProductRecord.

    Image URLs are resolved through the ``image_urls`` callable in the
    serializer context; without it only storage paths are returned.
    """

    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField()
    category_id = serializers.CharField(allow_null=True)
    category_name = serializers.CharField()
    seller_id = serializers.CharField()
    seller_name = serializers.CharField()
    seller_mobile = serializers.CharField()
    seller_college = serializers.CharField()
    image_paths = serializers.ListField(child=serializers.CharField())
    image_urls = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(allow_null=True)

    def get_image_urls(self, obj):
        resolve = self.context.get("image_urls")
        if resolve is None:
            return []
        return resolve(obj)


class ProductCreateSerializer(serializers.Serializer):
    """
    Request body for listing a product (multipart).

    Either ``category_id`` or ``new_category`` must be given.
    """

    title = serializers.CharField(max_length=MAX_TITLE_LENGTH)
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, max_value=MAX_PRICE)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    new_category = serializers.CharField(required=False, allow_blank=True, max_length=MAX_NAME_LENGTH)
    images = serializers.ListField(
        child=serializers.ImageField(allow_empty_file=False, use_url=False),
        required=False,
        max_length=MAX_IMAGES,
    )

    def validate(self, attrs):
        if not attrs.get("category_id") and not (attrs.get("new_category") or "").strip():
            raise serializers.ValidationError({"category_id": "Please select or add a category."})
        return attrs


class AdminProductCreateSerializer(ProductCreateSerializer):
    """Listing created by an admin on behalf of ``seller_id``"""

    seller_id = serializers.UUIDField()
