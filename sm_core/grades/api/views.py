# sm_core/grades/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.permissions import IsAuthenticated

from sm_core.common.permissions import AcademicGate, RequireTenant
from sm_core.common.views import TenantScopedViewSet
from sm_core.grades.api.serializers import GradeCreateSerializer, GradeSerializer, GradeUpdateSerializer
from sm_core.grades.services import GradeService


@extend_schema_view(
    list=extend_schema(tags=["Grades"], responses=GradeSerializer(many=True)),
    create=extend_schema(tags=["Grades"], request=GradeCreateSerializer, responses={201: GradeSerializer}),
    retrieve=extend_schema(tags=["Grades"], responses=GradeSerializer),
    update=extend_schema(tags=["Grades"], request=GradeUpdateSerializer, responses=GradeSerializer),
    destroy=extend_schema(tags=["Grades"]),
)
class GradeViewSet(TenantScopedViewSet):
    service = GradeService
    serializer_class = GradeSerializer
    create_serializer_class = GradeCreateSerializer
    update_serializer_class = GradeUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, AcademicGate]
