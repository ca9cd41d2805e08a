# sm_core/students/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sm_core.students.models import Parent, Student


class StudentCreateSerializer(serializers.Serializer):
    tenant_user_id = serializers.UUIDField()
    student_number = serializers.CharField(max_length=50)
    admission_date = serializers.DateField()
    class_id = serializers.UUIDField(source="school_class_id", required=False, allow_null=True)
    parent_id = serializers.UUIDField(required=False, allow_null=True)


class StudentUpdateSerializer(serializers.Serializer):
    """The owning TenantUser is fixed at creation."""
    student_number = serializers.CharField(max_length=50, required=False)
    admission_date = serializers.DateField(required=False)
    class_id = serializers.UUIDField(source="school_class_id", required=False, allow_null=True)
    parent_id = serializers.UUIDField(required=False, allow_null=True)


class StudentSerializer(serializers.ModelSerializer):
    class_id = serializers.UUIDField(source="school_class_id", read_only=True, allow_null=True)
    user_id = serializers.UUIDField(source="tenant_user.user_id", read_only=True)
    full_name = serializers.CharField(source="tenant_user.user.full_name", read_only=True)
    email = serializers.CharField(source="tenant_user.user.email", read_only=True)

    class Meta:
        model = Student
        fields = [
            "id",
            "tenant_id",
            "tenant_user_id",
            "user_id",
            "full_name",
            "email",
            "student_number",
            "admission_date",
            "class_id",
            "parent_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ParentCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    email = serializers.EmailField(max_length=100, required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    relationship = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")


class ParentUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=100, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    email = serializers.EmailField(max_length=100, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    relationship = serializers.CharField(max_length=50, required=False, allow_blank=True)


class ParentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Parent
        fields = [
            "id",
            "tenant_id",
            "full_name",
            "phone",
            "email",
            "address",
            "relationship",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
