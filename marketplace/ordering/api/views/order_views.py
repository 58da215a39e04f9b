from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    OrderStatusUpdateResponseSerializer,
    PlaceOrderResponseSerializer,
)
from marketplace.ordering.api.serializers.order_serializers import (
    OrderSerializer,
    OrderStatusUpdateSerializer,
    PlaceOrderSerializer,
)
from marketplace.services import OrderService


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="orders_list",
        summary="List user's orders (as buyer)",
        description="""
        **What it receives:**
        - Authentication token

        **What it returns:**
        - Orders where the caller is the buyer, newest first
        """,
        responses={
            200: OpenApiResponse(response=OrderSerializer(many=True), description="Orders retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        result = self.get_service().list_buyer_orders(str(request.user.id))
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_seller_orders",
        summary="List orders where user is the seller",
        description="""
        **What it returns:**
        - Orders for the caller's products, newest first, with product
          title/price and buyer contact (name, mobile, college)
        """,
        responses={
            200: OpenApiResponse(response=OrderSerializer(many=True), description="Orders retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"])
    def seller_orders(self, request):
        result = self.get_service().list_seller_orders(str(request.user.id))
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_create",
        summary="Buy a product",
        description="""
        **What it receives:**
        - `product_id`: an active product the caller does not sell
        - `delivery_address`: free text

        **What it does:**
        1. Stores the order at the product's current price (status `pending`)
        2. Marks the product sold

        Step 2 is not atomic with step 1. If it fails the order is still
        returned and `product_marked_sold` is false.
        """,
        request=PlaceOrderSerializer,
        responses={
            201: OpenApiResponse(response=PlaceOrderResponseSerializer, description="Order placed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error or own product"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Product already sold"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = PlaceOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().place_order(
            buyer_id=str(request.user.id),
            product_id=str(serializer.validated_data["product_id"]),
            delivery_address=serializer.validated_data["delivery_address"],
        )
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "order": OrderSerializer(result.value.order).data,
                "product_marked_sold": result.value.product_marked_sold,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="orders_update_status",
        summary="Set an order's status (seller only)",
        description="""
        Any of `pending`, `confirmed`, `shipped`, `delivered`, `cancelled`
        may follow any other.

        **What it returns:**
        - The updated order and the caller's seller orders reloaded
        """,
        request=OrderStatusUpdateSerializer,
        responses={
            200: OpenApiResponse(response=OrderStatusUpdateResponseSerializer, description="Status updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown status"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Caller is not the seller"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        service = self.get_service()
        seller_id = str(request.user.id)
        result = service.update_status(pk, serializer.validated_data["status"], acting_user_id=seller_id)
        if not result.ok:
            return error_response(result)

        seller_orders = service.list_seller_orders(seller_id)
        if not seller_orders.ok:
            return error_response(seller_orders)

        return Response(
            {
                "order": OrderSerializer(result.value).data,
                "seller_orders": OrderSerializer(seller_orders.value, many=True).data,
            },
            status=status.HTTP_200_OK,
        )
