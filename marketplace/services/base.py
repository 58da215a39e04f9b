"""
Base classes and utilities for the service layer.

Provides the ServiceResult pattern used by every marketplace and
authentication service, plus the BaseService logging helpers.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Expected failures (validation, missing rows, permission checks, backend
    errors) are returned as values instead of raised, so views only have to
    translate ``error`` into an HTTP status.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code from ErrorCodes (present if ok=False)
        error_detail: Human-readable message (present if ok=False)

    Examples:
        >>> result = service_ok(order)
        >>> if result.ok:
        ...     return Response(OrderSerializer(result.value).data)

        >>> result = service_err("order_not_found", "Order 42 does not exist")
        >>> result.error_detail
        'Order 42 does not exist'
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T) -> ServiceResult[T]:
    """Create a successful ServiceResult."""
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "product_not_found", "validation_error")
        error_detail: Human-readable error message, defaults to the code

    Returns:
        ServiceResult with ok=False and error information
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for services.

    Provides a logger named after the concrete class and the
    ``log_performance`` decorator.

    Usage:
        class OrderService(BaseService):
            def __init__(self, orders):
                super().__init__()
                self.orders = orders

            @BaseService.log_performance
            def list_seller_orders(self, seller_id):
                self.logger.info(f"Listing orders for seller {seller_id}")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log timing and outcome of service methods.

        ServiceResult failures are logged as warnings, raised exceptions as
        errors (and re-raised).
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper

    def wrap_exception(self, func: Callable, error_code: str) -> ServiceResult:
        """
        Execute a function and wrap any exception in a ServiceResult.

        Example:
            result = self.wrap_exception(
                lambda: self.categories.list_all(),
                error_code=ErrorCodes.DATABASE_ERROR,
            )
        """
        try:
            value = func()
            return service_ok(value)
        except Exception as e:
            self.logger.error(f"Exception in {getattr(func, '__name__', 'callable')}: {str(e)}", exc_info=True)
            return service_err(error_code, str(e))


class ErrorCodes:
    """Standard error codes used across services."""

    # Product errors
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_NOT_AVAILABLE = "product_not_available"
    CANNOT_BUY_OWN_PRODUCT = "cannot_buy_own_product"

    # Category / college errors
    CATEGORY_NOT_FOUND = "category_not_found"
    DUPLICATE_ENTRY = "duplicate_entry"

    # Order errors
    ORDER_NOT_FOUND = "order_not_found"
    NOT_ORDER_SELLER = "not_order_seller"
    INVALID_ORDER_STATUS = "invalid_order_status"

    # Profile / auth errors
    PROFILE_NOT_FOUND = "profile_not_found"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_TAKEN = "email_taken"
    INVALID_TOKEN = "invalid_token"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"

    # Validation errors
    VALIDATION_ERROR = "validation_error"

    # Infrastructure errors
    STORAGE_ERROR = "storage_error"
    DATABASE_ERROR = "database_error"
