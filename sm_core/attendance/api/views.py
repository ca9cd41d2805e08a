# sm_core/attendance/api/views.py
from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework.permissions import IsAuthenticated

from sm_core.attendance.api.serializers import (
    AttendanceCreateSerializer,
    AttendanceSerializer,
    AttendanceUpdateSerializer,
)
from sm_core.attendance.services import AttendanceService
from sm_core.common.permissions import AcademicGate, RequireTenant
from sm_core.common.views import TenantScopedViewSet


@extend_schema_view(
    list=extend_schema(
        tags=["Attendance"],
        responses=AttendanceSerializer(many=True),
        parameters=[
            OpenApiParameter("student_id", str, description="Student UUID"),
            OpenApiParameter("status", str, enum=["present", "absent", "late", "excused"]),
            OpenApiParameter("date_from", str, description="YYYY-MM-DD, inclusive"),
            OpenApiParameter("date_to", str, description="YYYY-MM-DD, inclusive"),
        ],
    ),
    create=extend_schema(tags=["Attendance"], request=AttendanceCreateSerializer, responses={201: AttendanceSerializer}),
    retrieve=extend_schema(tags=["Attendance"], responses=AttendanceSerializer),
    update=extend_schema(tags=["Attendance"], request=AttendanceUpdateSerializer, responses=AttendanceSerializer),
    destroy=extend_schema(tags=["Attendance"]),
)
class AttendanceViewSet(TenantScopedViewSet):
    service = AttendanceService
    serializer_class = AttendanceSerializer
    create_serializer_class = AttendanceCreateSerializer
    update_serializer_class = AttendanceUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, AcademicGate]
