import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import AdminRequired
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers.product_serializers import AdminProductCreateSerializer, ProductSerializer
from marketplace.catalog.api.views.product_views import listing_kwargs


logger = logging.getLogger(__name__)


class AdminProductCreateView(APIView):
    """Admins list a product on behalf of any user."""

    permission_classes = [AdminRequired]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        operation_id="admin_products_create",
        summary="Create a product for another user (admin)",
        description="Same rules as listing a product; `seller_id` picks the seller.",
        request=AdminProductCreateSerializer,
        responses={
            201: OpenApiResponse(response=ProductSerializer, description="Product listed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not an admin"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Seller not found"),
        },
        tags=["Admin"],
    )
    def post(self, request):
        serializer = AdminProductCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        service = container.catalog_service()
        seller_id = str(serializer.validated_data["seller_id"])
        result = service.create_product_for(seller_id, **listing_kwargs(serializer.validated_data))
        if not result.ok:
            return error_response(result)

        logger.info(f"Admin {request.user.id} listed product {result.value.id} for {seller_id}")
        return Response(
            ProductSerializer(result.value, context={"request": request, "image_urls": service.image_urls}).data,
            status=status.HTTP_201_CREATED,
        )
