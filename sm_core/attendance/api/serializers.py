# sm_core/attendance/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sm_core.attendance.models import Attendance, AttendanceStatus


class AttendanceCreateSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    attendance_date = serializers.DateField()
    status = serializers.ChoiceField(choices=AttendanceStatus.choices)
    remarks = serializers.CharField(required=False, allow_blank=True, default="")


class AttendanceUpdateSerializer(serializers.Serializer):
    student_id = serializers.UUIDField(required=False)
    attendance_date = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=AttendanceStatus.choices, required=False)
    remarks = serializers.CharField(required=False, allow_blank=True)


class AttendanceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Attendance
        fields = [
            "id",
            "tenant_id",
            "student_id",
            "attendance_date",
            "status",
            "remarks",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
