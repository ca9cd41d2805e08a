# sm_core/grades/selectors.py
from __future__ import annotations

import django_filters

from sm_core.common.repository import TenantRepository
from sm_core.grades.models import Grade, GradeType


class GradeFilter(django_filters.FilterSet):
    student_id = django_filters.UUIDFilter(field_name="student_id")
    subject_id = django_filters.UUIDFilter(field_name="subject_id")
    grade_type = django_filters.ChoiceFilter(choices=GradeType.choices)

    class Meta:
        model = Grade
        fields = ["student_id", "subject_id", "grade_type"]


grades = TenantRepository(
    Grade,
    search_fields=("remarks", "subject__name", "subject__code", "student__student_number"),
    ordering_fields=("score", "grade_type", "updated_at"),
    filterset_class=GradeFilter,
)
