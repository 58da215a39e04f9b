"""
OrderService - placing orders and moving them through their statuses.

Placing an order is two independent writes: insert the order, then mark
the product sold. There is no transaction around them. If the second write
fails the order stands and the product stays listed as active; the failure
is logged and reported on the result (``product_marked_sold``), not
compensated.
"""

import logging
from dataclasses import dataclass
from typing import List

from infrastructure.repositories import (
    OrderRecord,
    OrderRepository,
    ProductRepository,
    RecordNotFound,
    RepositoryError,
)
from marketplace.catalog.domain.models.catalog import PRODUCT_ACTIVE, PRODUCT_SOLD
from marketplace.infra.observability.metrics import order_status_updates_total, order_value, orders_placed_total
from marketplace.ordering.domain import lifecycle
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order: OrderRecord
    product_marked_sold: bool


class OrderService(BaseService):
    """
    Service for the order lifecycle.
    """

    def __init__(self, orders: OrderRepository, products: ProductRepository):
        super().__init__()
        self.orders = orders
        self.products = products

    @BaseService.log_performance
    def place_order(self, buyer_id: str, product_id: str, delivery_address: str) -> ServiceResult[PlacedOrder]:
        """
        Place an order for a product at its current price.

        Args:
            buyer_id: Acting user
            product_id: Product to buy
            delivery_address: Free-text delivery address (required)
        """
        delivery_address = (delivery_address or "").strip()
        if not delivery_address:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Delivery address is required")

        try:
            product = self.products.get(product_id)
        except RecordNotFound:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} does not exist")
        except RepositoryError as e:
            self.logger.error(f"Failed to load product {product_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to place order")

        if product.seller_id == str(buyer_id):
            return service_err(ErrorCodes.CANNOT_BUY_OWN_PRODUCT, "You cannot buy your own product")
        if product.status != PRODUCT_ACTIVE:
            return service_err(ErrorCodes.PRODUCT_NOT_AVAILABLE, f"'{product.title}' is no longer available")

        try:
            order = self.orders.insert(
                buyer_id=str(buyer_id),
                seller_id=product.seller_id,
                product_id=product.id,
                total_amount=product.price,
                delivery_address=delivery_address,
            )
        except RepositoryError as e:
            self.logger.error(f"Failed to insert order for product {product_id}: {e}")
            orders_placed_total.labels(outcome="failure", product_marked_sold="false").inc()
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to place order")

        marked_sold = True
        try:
            self.products.update_status(product.id, PRODUCT_SOLD)
        except RepositoryError as e:
            marked_sold = False
            self.logger.error(
                f"Order {order.id} placed but product {product.id} could not be marked sold: {e}"
            )

        orders_placed_total.labels(outcome="success", product_marked_sold=str(marked_sold).lower()).inc()
        order_value.observe(float(order.total_amount))
        self.logger.info(f"Order {order.id} placed by {buyer_id} for product {product.id}")
        return service_ok(PlacedOrder(order=order, product_marked_sold=marked_sold))

    def list_seller_orders(self, seller_id: str) -> ServiceResult[List[OrderRecord]]:
        return self.wrap_exception(lambda: self.orders.list_by_seller(str(seller_id)), ErrorCodes.DATABASE_ERROR)

    def list_buyer_orders(self, buyer_id: str) -> ServiceResult[List[OrderRecord]]:
        return self.wrap_exception(lambda: self.orders.list_by_buyer(str(buyer_id)), ErrorCodes.DATABASE_ERROR)

    @BaseService.log_performance
    def update_status(self, order_id: str, new_status: str, acting_user_id: str) -> ServiceResult[OrderRecord]:
        """
        Set an order's status. Any status may follow any other.

        Only the seller of the order may change it. If the write fails the
        stored status is left as it was.
        """
        if not lifecycle.is_valid_status(new_status):
            return service_err(ErrorCodes.INVALID_ORDER_STATUS, str(lifecycle.InvalidOrderStatus(new_status)))

        try:
            order = self.orders.get(order_id)
        except RecordNotFound:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} does not exist")
        except RepositoryError as e:
            self.logger.error(f"Failed to load order {order_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to update order status")

        if order.seller_id != str(acting_user_id):
            return service_err(ErrorCodes.NOT_ORDER_SELLER, "Only the seller can update this order")

        target = lifecycle.transition(order, new_status)
        try:
            stored = self.orders.update_status(order.id, target.status)
        except RepositoryError as e:
            self.logger.error(f"Failed to update order {order_id} to {new_status}: {e}")
            order_status_updates_total.labels(status=new_status, outcome="failure").inc()
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to update order status")

        order_status_updates_total.labels(status=stored.status, outcome="success").inc()
        self.logger.info(f"Order {order.id}: {order.status} -> {stored.status}")
        return service_ok(stored)
