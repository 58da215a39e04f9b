"""
ServiceResult error codes to HTTP responses.
"""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorCodes, ServiceResult


ERROR_STATUS = {
    ErrorCodes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_ORDER_STATUS: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.CATEGORY_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.CANNOT_BUY_OWN_PRODUCT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_ORDER_SELLER: status.HTTP_403_FORBIDDEN,
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PROFILE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_AVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCodes.DUPLICATE_ENTRY: status.HTTP_409_CONFLICT,
    ErrorCodes.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
}


def error_response(result: ServiceResult) -> Response:
    """Build the ``{"detail", "code"}`` response for a failed result. Unmapped codes are 500s."""
    return Response(
        {"detail": result.error_detail, "code": result.error},
        status=ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )
