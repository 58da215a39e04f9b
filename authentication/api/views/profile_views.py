from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import ProfileSerializer, ProfileUpdateSerializer
from authentication.domain.services import ProfileService
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer


def get_profile_service() -> ProfileService:
    return container.profile_service()


class ProfileView(APIView):
    """The caller's own profile."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="profile_retrieve",
        summary="Get own profile",
        responses={
            200: ProfileSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No profile for this user"),
        },
        tags=["Profile"],
    )
    def get(self, request):
        result = get_profile_service().get_profile(str(request.user.id))
        if not result.ok:
            return error_response(result)
        return Response(ProfileSerializer(result.value).data)

    @extend_schema(
        operation_id="profile_update",
        summary="Update own profile",
        description="""
        Any of full name, mobile number and college. The college is picked
        by `college_id` or typed in as `new_college` (created if missing).
        """,
        request=ProfileUpdateSerializer,
        responses={
            200: ProfileSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Profile"],
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = get_profile_service().update_profile(
            str(request.user.id),
            full_name=data.get("full_name"),
            mobile_number=data.get("mobile_number"),
            college_id=str(data["college_id"]) if data.get("college_id") else None,
            new_college=data.get("new_college") or None,
        )
        if not result.ok:
            return error_response(result)
        return Response(ProfileSerializer(result.value).data)
