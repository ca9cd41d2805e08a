# sm_core/teachers/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.permissions import IsAuthenticated

from sm_core.common.permissions import RequireTenant, TeacherManagementGate
from sm_core.common.views import TenantScopedViewSet
from sm_core.teachers.api.serializers import TeacherCreateSerializer, TeacherSerializer, TeacherUpdateSerializer
from sm_core.teachers.services import TeacherService


@extend_schema_view(
    list=extend_schema(tags=["Teachers"], responses=TeacherSerializer(many=True)),
    create=extend_schema(tags=["Teachers"], request=TeacherCreateSerializer, responses={201: TeacherSerializer}),
    retrieve=extend_schema(tags=["Teachers"], responses=TeacherSerializer),
    update=extend_schema(tags=["Teachers"], request=TeacherUpdateSerializer, responses=TeacherSerializer),
    destroy=extend_schema(tags=["Teachers"]),
)
class TeacherViewSet(TenantScopedViewSet):
    service = TeacherService
    serializer_class = TeacherSerializer
    create_serializer_class = TeacherCreateSerializer
    update_serializer_class = TeacherUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, TeacherManagementGate]
