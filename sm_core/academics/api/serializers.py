# sm_core/academics/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sm_core.academics.models import SchoolClass, Subject


class SchoolClassCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    grade_level = serializers.IntegerField(min_value=0, max_value=32767, required=False, allow_null=True)
    homeroom_teacher_id = serializers.UUIDField(required=False, allow_null=True)
    academic_year = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)

    def validate_academic_year(self, value):
        return value or None


class SchoolClassUpdateSerializer(SchoolClassCreateSerializer):
    name = serializers.CharField(max_length=50, required=False)


class SchoolClassSerializer(serializers.ModelSerializer):
    class Meta:
        model = SchoolClass
        fields = [
            "id",
            "tenant_id",
            "name",
            "grade_level",
            "homeroom_teacher_id",
            "academic_year",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SubjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    code = serializers.CharField(max_length=50)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    credit = serializers.IntegerField(min_value=0, max_value=32767, required=False, default=0)


class SubjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    code = serializers.CharField(max_length=50, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    credit = serializers.IntegerField(min_value=0, max_value=32767, required=False)


class SubjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subject
        fields = ["id", "tenant_id", "name", "code", "description", "credit", "created_at", "updated_at"]
        read_only_fields = fields
