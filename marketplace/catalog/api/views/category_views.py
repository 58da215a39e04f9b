import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers.category_serializers import NamedEntryCreateSerializer, NamedEntrySerializer
from marketplace.services import TaxonomyService


logger = logging.getLogger(__name__)


class _NamedEntryViewSet(viewsets.ViewSet):
    """
    Flat name lists. Anyone may read; signed-in users add entries ad hoc.

    POST answers 201 when the entry was created and 200 when an entry with
    that exact name already existed.
    """

    kind = ""

    def get_service(self) -> TaxonomyService:
        return container.taxonomy_service()

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated()]
        return [AllowAny()]

    def _list(self, service):
        raise NotImplementedError

    def _ensure(self, service, name):
        raise NotImplementedError

    def list(self, request):
        result = self._list(self.get_service())
        if not result.ok:
            return error_response(result)
        return Response(NamedEntrySerializer(result.value, many=True).data)

    def create(self, request):
        serializer = NamedEntryCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self._ensure(self.get_service(), serializer.validated_data["name"])
        if not result.ok:
            return error_response(result)

        entry, created = result.value
        if created:
            logger.info(f"User {request.user.id} added {self.kind} '{entry.name}'")
        return Response(
            NamedEntrySerializer(entry).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


@extend_schema_view(
    list=extend_schema(
        summary="List all categories",
        description="Every category, ordered by name.",
        responses={200: NamedEntrySerializer(many=True)},
        tags=["Marketplace - Categories"],
    ),
    create=extend_schema(
        summary="Add a category",
        request=NamedEntryCreateSerializer,
        responses={
            201: OpenApiResponse(response=NamedEntrySerializer, description="Category created"),
            200: OpenApiResponse(response=NamedEntrySerializer, description="Category already existed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Marketplace - Categories"],
    ),
)
class CategoryViewSet(_NamedEntryViewSet):
    kind = "category"

    def _list(self, service):
        return service.list_categories()

    def _ensure(self, service, name):
        return service.ensure_category(name)


@extend_schema_view(
    list=extend_schema(
        summary="List all colleges",
        description="Every college, ordered by name.",
        responses={200: NamedEntrySerializer(many=True)},
        tags=["Marketplace - Colleges"],
    ),
    create=extend_schema(
        summary="Add a college",
        request=NamedEntryCreateSerializer,
        responses={
            201: OpenApiResponse(response=NamedEntrySerializer, description="College created"),
            200: OpenApiResponse(response=NamedEntrySerializer, description="College already existed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Marketplace - Colleges"],
    ),
)
class CollegeViewSet(_NamedEntryViewSet):
    kind = "college"

    def _list(self, service):
        return service.list_colleges()

    def _ensure(self, service, name):
        return service.ensure_college(name)
