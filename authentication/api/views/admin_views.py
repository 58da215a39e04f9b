import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import RoleUpdateSerializer, UserAccountSerializer
from authentication.domain.services import RoleService
from authentication.permissions import AdminRequired
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer


logger = logging.getLogger(__name__)


def get_role_service() -> RoleService:
    return container.role_service()


def account_payload(account) -> dict:
    return UserAccountSerializer(account).data


class AdminUserListView(APIView):
    permission_classes = [AdminRequired]

    @extend_schema(
        operation_id="admin_users_list",
        summary="List all users with their roles (admin)",
        responses={
            200: UserAccountSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not an admin"),
        },
        tags=["Admin"],
    )
    def get(self, request):
        result = get_role_service().list_users()
        if not result.ok:
            return error_response(result)
        return Response([account_payload(account) for account in result.value])


class AdminUserRoleView(APIView):
    permission_classes = [AdminRequired]

    @extend_schema(
        operation_id="admin_users_set_role",
        summary="Set a user's role (admin)",
        description="`admin` grants the admin role; `user` removes it.",
        request=RoleUpdateSerializer,
        responses={
            200: UserAccountSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid role"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not an admin"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["Admin"],
    )
    def put(self, request, user_id):
        serializer = RoleUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_role_service().set_role(str(request.user.id), str(user_id), serializer.validated_data["role"])
        if not result.ok:
            return error_response(result)
        return Response(account_payload(result.value), status=status.HTTP_200_OK)
