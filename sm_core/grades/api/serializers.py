# sm_core/grades/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from sm_core.grades.models import Grade, GradeType

SCORE_MIN = Decimal("0")
SCORE_MAX = Decimal("100")


class GradeCreateSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    subject_id = serializers.UUIDField()
    grade_type = serializers.ChoiceField(choices=GradeType.choices)
    score = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=SCORE_MIN, max_value=SCORE_MAX)
    remarks = serializers.CharField(required=False, allow_blank=True, default="")


class GradeUpdateSerializer(serializers.Serializer):
    student_id = serializers.UUIDField(required=False)
    subject_id = serializers.UUIDField(required=False)
    grade_type = serializers.ChoiceField(choices=GradeType.choices, required=False)
    score = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=SCORE_MIN, max_value=SCORE_MAX, required=False
    )
    remarks = serializers.CharField(required=False, allow_blank=True)


class GradeSerializer(serializers.ModelSerializer):
    score = serializers.DecimalField(max_digits=5, decimal_places=2, coerce_to_string=False, read_only=True)

    class Meta:
        model = Grade
        fields = [
            "id",
            "tenant_id",
            "student_id",
            "subject_id",
            "grade_type",
            "score",
            "remarks",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
