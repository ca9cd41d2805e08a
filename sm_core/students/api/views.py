# sm_core/students/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from sm_core.common.permissions import AcademicGate, RequireTenant
from sm_core.common.views import TenantScopedViewSet, parse_uuid
from sm_core.students.api.serializers import (
    ParentCreateSerializer,
    ParentSerializer,
    ParentUpdateSerializer,
    StudentCreateSerializer,
    StudentSerializer,
    StudentUpdateSerializer,
)
from sm_core.students.services import ParentService, StudentService


@extend_schema_view(
    list=extend_schema(tags=["Students"], responses=StudentSerializer(many=True)),
    create=extend_schema(tags=["Students"], request=StudentCreateSerializer, responses={201: StudentSerializer}),
    retrieve=extend_schema(tags=["Students"], responses=StudentSerializer),
    update=extend_schema(tags=["Students"], request=StudentUpdateSerializer, responses=StudentSerializer),
    destroy=extend_schema(tags=["Students"]),
    by_class=extend_schema(tags=["Students"], responses=StudentSerializer(many=True)),
    by_parent=extend_schema(tags=["Students"], responses=StudentSerializer(many=True)),
)
class StudentViewSet(TenantScopedViewSet):
    """
    Students of the current tenant, plus two scoped listings:

      GET /students/class/{class_id}
      GET /students/parent/{parent_id}
    """

    service = StudentService
    serializer_class = StudentSerializer
    create_serializer_class = StudentCreateSerializer
    update_serializer_class = StudentUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, AcademicGate]

    @action(detail=False, methods=["get"], url_path=r"class/(?P<class_id>[^/]+)")
    def by_class(self, request, class_id=None):
        page = self.service.list_by_class(
            tenant_id=self.tenant_id,
            class_id=parse_uuid(class_id, entity="class"),
            params=self.page_params(),
        )
        return self.paginated_response(page)

    @action(detail=False, methods=["get"], url_path=r"parent/(?P<parent_id>[^/]+)")
    def by_parent(self, request, parent_id=None):
        page = self.service.list_by_parent(
            tenant_id=self.tenant_id,
            parent_id=parse_uuid(parent_id, entity="parent"),
            params=self.page_params(),
        )
        return self.paginated_response(page)


@extend_schema_view(
    list=extend_schema(tags=["Parents"], responses=ParentSerializer(many=True)),
    create=extend_schema(tags=["Parents"], request=ParentCreateSerializer, responses={201: ParentSerializer}),
    retrieve=extend_schema(tags=["Parents"], responses=ParentSerializer),
    update=extend_schema(tags=["Parents"], request=ParentUpdateSerializer, responses=ParentSerializer),
    destroy=extend_schema(tags=["Parents"]),
)
class ParentViewSet(TenantScopedViewSet):
    service = ParentService
    serializer_class = ParentSerializer
    create_serializer_class = ParentCreateSerializer
    update_serializer_class = ParentUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, AcademicGate]
