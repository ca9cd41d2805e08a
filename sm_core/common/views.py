# sm_core/common/views.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional
from uuid import UUID

from django.conf import settings
from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.utils import timezone
from rest_framework import serializers, status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from sm_core.common.api.exceptions import (
    InvalidInput,
    Internal,
    NotFound,
    SchoolAPIException,
    ValidationFailed,
    build_error_envelope,
    flatten_validation_errors,
)
from sm_core.common.api.pagination import PageParams
from sm_core.common.api.responses import created, paginated, success
from sm_core.common.permissions import RequireTenant

logger = logging.getLogger(__name__)


# -----------------------------
# health + JSON error pages
# -----------------------------

class HealthView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    def get(self, request):
        checks = {"database": "ok"}
        http_status = status.HTTP_200_OK
        try:
            with connections["default"].cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError:
            logger.error("health check: database unreachable", exc_info=True)
            checks["database"] = "unavailable"
            http_status = status.HTTP_503_SERVICE_UNAVAILABLE

        healthy = http_status == status.HTTP_200_OK
        return Response(
            {
                "status": "healthy" if healthy else "unhealthy",
                "message": f"{settings.APP_NAME} is running" if healthy else "database unavailable",
                "app": {
                    "name": settings.APP_NAME,
                    "version": settings.APP_VERSION,
                    "description": settings.APP_DESCRIPTION,
                    "url": settings.APP_URL,
                    "timezone": settings.TIME_ZONE,
                    "locale": settings.APP_LOCALE,
                    "server_time": timezone.now().isoformat(),
                },
                "checks": checks,
            },
            status=http_status,
        )


def handler404(request, exception=None):
    return JsonResponse(
        build_error_envelope(message=NotFound.default_title, error="route not found"),
        status=404,
    )


def handler500(request):
    return JsonResponse(
        build_error_envelope(message=Internal.default_title, error=Internal.default_detail),
        status=500,
    )


# -----------------------------
# tenant-scoped CRUD base
# -----------------------------

class BulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


def parse_uuid(raw: Any, *, entity: str) -> UUID:
    try:
        return UUID(str(raw))
    except (TypeError, ValueError):
        raise InvalidInput(f"{entity} ID must be a valid UUID", title=f"Invalid {entity} ID format")


@contextmanager
def failure_title(title: str) -> Iterator[None]:
    """Give 4xx service errors a handler-level message, e.g. "Failed to create student"."""
    try:
        yield
    except SchoolAPIException as exc:
        if exc.status_code < 500 and exc.title == exc.default_title:
            exc.title = title
        raise


class TenantScopedViewSet(viewsets.ViewSet):
    """
    Base ViewSet for tenant-scoped collections.

    Subclasses provide `service` (a TenantCrudService), the output
    `serializer_class`, `create_serializer_class`, `update_serializer_class`
    and a RoleGate in `permission_classes`. Every call is pinned to
    request.tenant_id.
    """

    service = None
    serializer_class = None
    create_serializer_class = None
    update_serializer_class = None

    permission_classes = [IsAuthenticated, RequireTenant]
    lookup_value_regex = "[^/]+"

    # -----------------------------
    # helpers
    # -----------------------------

    @property
    def entity(self) -> str:
        return self.service.entity

    @property
    def tenant_id(self) -> UUID:
        return self.request.tenant_id

    @property
    def actor_id(self) -> Optional[UUID]:
        user = self.request.user
        return user.id if user is not None else None

    def object_id(self, raw: Any) -> UUID:
        return parse_uuid(raw, entity=self.entity)

    def validated(self, serializer_class, data, **kwargs) -> dict[str, Any]:
        ser = serializer_class(data=data, **kwargs)
        if not ser.is_valid():
            logger.warning(
                "validation failed",
                extra={"entity": self.entity, "errors": flatten_validation_errors(ser.errors)},
            )
            raise ValidationFailed(flatten_validation_errors(ser.errors))
        return dict(ser.validated_data)

    def serialize(self, obj) -> dict[str, Any]:
        return self.serializer_class(obj).data

    def page_params(self) -> PageParams:
        return PageParams.from_query(
            self.request.query_params,
            sort_fields=self.service.repository.ordering_fields,
        )

    def paginated_response(self, page) -> Response:
        return paginated(
            f"{self.service.plural().capitalize()} retrieved successfully",
            self.serializer_class(page.items, many=True).data,
            page.meta,
        )

    # -----------------------------
    # actions
    # -----------------------------

    def list(self, request):
        page = self.service.list(
            tenant_id=self.tenant_id,
            params=self.page_params(),
            filters=request.query_params,
        )
        return self.paginated_response(page)

    def create(self, request):
        data = self.validated(self.create_serializer_class, request.data)
        with failure_title(f"Failed to create {self.entity}"):
            obj = self.service.create(tenant_id=self.tenant_id, actor_user_id=self.actor_id, data=data)
        return created(f"{self.entity.capitalize()} created successfully", self.serialize(obj))

    def retrieve(self, request, pk=None):
        obj = self.service.get(tenant_id=self.tenant_id, obj_id=self.object_id(pk))
        return success(f"{self.entity.capitalize()} retrieved successfully", self.serialize(obj))

    def update(self, request, pk=None):
        obj_id = self.object_id(pk)
        data = self.validated(self.update_serializer_class, request.data, partial=True)
        with failure_title(f"Failed to update {self.entity}"):
            obj = self.service.update(
                tenant_id=self.tenant_id,
                actor_user_id=self.actor_id,
                obj_id=obj_id,
                data=data,
            )
        return success(f"{self.entity.capitalize()} updated successfully", self.serialize(obj))

    def destroy(self, request, pk=None):
        obj_id = self.object_id(pk)
        with failure_title(f"Failed to delete {self.entity}"):
            self.service.delete(tenant_id=self.tenant_id, actor_user_id=self.actor_id, obj_id=obj_id)
        return success(f"{self.entity.capitalize()} deleted successfully")

    def bulk_destroy(self, request):
        data = self.validated(BulkDeleteSerializer, request.data)
        result = self.service.bulk_delete(
            tenant_id=self.tenant_id,
            actor_user_id=self.actor_id,
            ids=data["ids"],
        )
        return success(f"{self.service.plural().capitalize()} deleted successfully", result)
