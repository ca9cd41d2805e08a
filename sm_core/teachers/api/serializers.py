# sm_core/teachers/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sm_core.teachers.models import Teacher


class TeacherCreateSerializer(serializers.Serializer):
    tenant_user_id = serializers.UUIDField()
    employee_number = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    hire_date = serializers.DateField(required=False, allow_null=True)
    qualification = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    position = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")

    def validate_employee_number(self, value):
        return value or None


class TeacherUpdateSerializer(TeacherCreateSerializer):
    tenant_user_id = serializers.UUIDField(required=False)
    qualification = serializers.CharField(max_length=255, required=False, allow_blank=True)
    position = serializers.CharField(max_length=100, required=False, allow_blank=True)


class TeacherSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source="tenant_user.user_id", read_only=True)
    full_name = serializers.CharField(source="tenant_user.user.full_name", read_only=True)
    email = serializers.CharField(source="tenant_user.user.email", read_only=True)

    class Meta:
        model = Teacher
        fields = [
            "id",
            "tenant_id",
            "tenant_user_id",
            "user_id",
            "full_name",
            "email",
            "employee_number",
            "hire_date",
            "qualification",
            "position",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
