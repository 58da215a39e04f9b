from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    ProfileSerializer,
    SignInSerializer,
    SignOutSerializer,
    SignUpSerializer,
    UserSerializer,
)
from authentication.api.serializers.response_serializers import (
    AuthResponseSerializer,
    MessageResponseSerializer,
    SessionResponseSerializer,
)
from authentication.domain.services import AuthService
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer


def get_auth_service() -> AuthService:
    return container.auth_service()


def auth_payload(auth_result) -> dict:
    return {
        "access": auth_result.tokens.access,
        "refresh": auth_result.tokens.refresh,
        "user": UserSerializer(auth_result.user).data,
        "profile": ProfileSerializer(auth_result.profile).data if auth_result.profile else None,
        "is_admin": auth_result.is_admin,
    }


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_register",
        summary="Register new user account",
        description="""
        Create an account and its profile, and sign in straight away.

        **College:** pass `college_id` for an existing college, or
        `new_college` to add one. A college added here is removed again if
        the account cannot be created.
        """,
        request=SignUpSerializer,
        responses={
            201: OpenApiResponse(response=AuthResponseSerializer, description="Registration successful"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already registered"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = SignUpSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = get_auth_service().sign_up(
            email=data["email"],
            password=data["password"],
            full_name=data["full_name"],
            mobile_number=data["mobile_number"],
            college_id=str(data["college_id"]) if data.get("college_id") else None,
            new_college=data.get("new_college") or None,
        )
        if not result.ok:
            return error_response(result)

        return Response(auth_payload(result.value), status=status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        request=SignInSerializer,
        responses={
            200: OpenApiResponse(
                response=AuthResponseSerializer,
                description="Login successful",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "email": "student@college.edu",
                                "date_joined": "2024-09-01T10:00:00Z",
                            },
                            "profile": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "email": "student@college.edu",
                                "full_name": "Asha Rao",
                                "mobile_number": "9876543210",
                                "college": "City Engineering College",
                                "created_at": "2024-09-01T10:00:00Z",
                            },
                            "is_admin": False,
                        },
                    )
                ],
            ),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_auth_service().sign_in(serializer.validated_data["email"], serializer.validated_data["password"])
        if not result.ok:
            return error_response(result)

        return Response(auth_payload(result.value), status=status.HTTP_200_OK)


class LogoutAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_logout",
        summary="Sign out",
        description="Blacklists the refresh token. Access tokens expire on their own.",
        request=SignOutSerializer,
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="Signed out"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid or expired token"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Token belongs to another user"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = SignOutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_auth_service().sign_out(serializer.validated_data["refresh"], request.user)
        if not result.ok:
            return error_response(result)
        return Response({"message": "Signed out"}, status=status.HTTP_200_OK)


class SessionView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_session",
        summary="Current session",
        description="The signed-in user, their profile and whether they are an admin.",
        responses={200: SessionResponseSerializer},
        tags=["Authentication"],
    )
    def get(self, request):
        result = get_auth_service().current_session(request.user)
        if not result.ok:
            return error_response(result)

        session = result.value
        return Response(
            {
                "user_id": session.user_id,
                "email": session.email,
                "profile": ProfileSerializer(session.profile).data if session.profile else None,
                "is_admin": session.is_admin,
            }
        )
