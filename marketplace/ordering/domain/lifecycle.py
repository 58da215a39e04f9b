"""
Order status lifecycle.

An order carries one of five statuses. Sellers may move an order to any
status from any status: there is no transition graph, so corrections such
as ``delivered -> pending`` are allowed. Only membership in the enumeration
is checked.
"""

import dataclasses
from typing import Tuple

PENDING = "pending"
CONFIRMED = "confirmed"
SHIPPED = "shipped"
DELIVERED = "delivered"
CANCELLED = "cancelled"

ORDER_STATUSES: Tuple[str, ...] = (PENDING, CONFIRMED, SHIPPED, DELIVERED, CANCELLED)
INITIAL_STATUS = PENDING

STATUS_CHOICES = [
    (PENDING, "Pending"),
    (CONFIRMED, "Confirmed"),
    (SHIPPED, "Shipped"),
    (DELIVERED, "Delivered"),
    (CANCELLED, "Cancelled"),
]


class InvalidOrderStatus(ValueError):
    def __init__(self, status):
        self.status = status
        super().__init__(f"'{status}' is not a valid order status. Expected one of: {', '.join(ORDER_STATUSES)}")


def is_valid_status(status) -> bool:
    return status in ORDER_STATUSES


def validate_status(status) -> str:
    if not is_valid_status(status):
        raise InvalidOrderStatus(status)
    return status


def transition(order, target: str):
    """
    Return a copy of ``order`` (a frozen dataclass record) carrying ``target``.

    Raises:
        InvalidOrderStatus: if ``target`` is not one of ORDER_STATUSES
    """
    validate_status(target)
    return dataclasses.replace(order, status=target)
