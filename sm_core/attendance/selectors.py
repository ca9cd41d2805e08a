# sm_core/attendance/selectors.py
from __future__ import annotations

import django_filters

from sm_core.attendance.models import Attendance, AttendanceStatus
from sm_core.common.repository import TenantRepository


class AttendanceFilter(django_filters.FilterSet):
    student_id = django_filters.UUIDFilter(field_name="student_id")
    status = django_filters.ChoiceFilter(choices=AttendanceStatus.choices)
    date_from = django_filters.DateFilter(field_name="attendance_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="attendance_date", lookup_expr="lte")

    class Meta:
        model = Attendance
        fields = ["student_id", "status", "date_from", "date_to"]


attendance = TenantRepository(
    Attendance,
    search_fields=("remarks", "student__student_number"),
    ordering_fields=("attendance_date", "status", "updated_at"),
    filterset_class=AttendanceFilter,
)
