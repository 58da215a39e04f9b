import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import CatalogResponseSerializer, ErrorResponseSerializer
from marketplace.catalog.api.serializers.product_serializers import ProductCreateSerializer, ProductSerializer
from marketplace.catalog.domain.services.catalog_filter import FilterSelection
from marketplace.services import CatalogService


logger = logging.getLogger(__name__)


def listing_kwargs(validated_data) -> dict:
    """Map a validated create-listing payload to CatalogService.create_product kwargs."""
    category_id = validated_data.get("category_id")
    return {
        "title": validated_data["title"],
        "description": validated_data["description"],
        "price": validated_data["price"],
        "category_id": str(category_id) if category_id else None,
        "new_category": validated_data.get("new_category") or None,
        "images": validated_data.get("images", []),
    }


class ProductViewSet(viewsets.ViewSet):
    """
    Catalog and listings using the Service Layer.

    Anyone may browse; listing a product requires a signed-in user.
    """

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def get_permissions(self):
        if self.action in ["create", "mine"]:
            return [IsAuthenticated()]
        return [AllowAny()]

    def _serializer_context(self, service: CatalogService) -> dict:
        return {"request": self.request, "image_urls": service.image_urls}

    @extend_schema(
        operation_id="products_list",
        summary="Browse the catalog",
        description="""
        Active products, newest first, filtered by free text, category and
        seller college.

        When no `college` parameter is sent and the caller is signed in, the
        college filter defaults to the caller's own college. Send
        `college=all` to see every college.
        """,
        parameters=[
            OpenApiParameter(name="q", type=str, description="Case-insensitive text in title or description"),
            OpenApiParameter(name="category", type=str, description="Category id, or 'all' (default)"),
            OpenApiParameter(name="college", type=str, description="Seller college name, or 'all'"),
        ],
        responses={
            200: OpenApiResponse(response=CatalogResponseSerializer, description="Filtered catalog"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        service = self.get_service()
        selection = FilterSelection.from_params(request.query_params)
        viewer_id = str(request.user.id) if request.user.is_authenticated else None

        result = service.browse(selection, viewer_id=viewer_id)
        if not result.ok:
            return error_response(result)

        data = dict(result.value)
        data["results"] = ProductSerializer(
            result.value["results"], many=True, context=self._serializer_context(service)
        ).data
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Product detail",
        description="Product with category name, seller contact and public image URLs.",
        responses={
            200: OpenApiResponse(response=ProductSerializer, description="Product retrieved successfully"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        service = self.get_service()
        result = service.get_product(pk)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value, context=self._serializer_context(service)).data)

    @extend_schema(
        operation_id="products_create",
        summary="List a product for sale",
        description="""
        Multipart form: title, description, price, and either `category_id`
        or `new_category`; any number of `images` files.

        Images are uploaded first, then the product is stored. If storing
        fails, uploaded images and a category created by this request are
        removed again.
        """,
        request=ProductCreateSerializer,
        responses={
            201: OpenApiResponse(response=ProductSerializer, description="Product listed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Storage or database error"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        service = self.get_service()
        result = service.create_product(str(request.user.id), **listing_kwargs(serializer.validated_data))
        if not result.ok:
            return error_response(result)

        return Response(
            ProductSerializer(result.value, context=self._serializer_context(service)).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="products_mine",
        summary="My listings",
        description="Every product the caller listed, sold ones included, newest first.",
        responses={200: ProductSerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def mine(self, request):
        service = self.get_service()
        result = service.list_seller_products(str(request.user.id))
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value, many=True, context=self._serializer_context(service)).data)
