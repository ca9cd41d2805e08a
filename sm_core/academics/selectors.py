# sm_core/academics/selectors.py
from __future__ import annotations

import django_filters

from sm_core.academics.models import SchoolClass, Subject
from sm_core.common.repository import TenantRepository


class SchoolClassFilter(django_filters.FilterSet):
    grade_level = django_filters.NumberFilter()
    academic_year = django_filters.CharFilter()
    homeroom_teacher_id = django_filters.UUIDFilter()

    class Meta:
        model = SchoolClass
        fields = ["grade_level", "academic_year", "homeroom_teacher_id"]


classes = TenantRepository(
    SchoolClass,
    search_fields=("name", "academic_year"),
    ordering_fields=("name", "grade_level", "academic_year", "updated_at"),
    filterset_class=SchoolClassFilter,
)

subjects = TenantRepository(
    Subject,
    search_fields=("name", "code", "description"),
    ordering_fields=("name", "code", "credit", "updated_at"),
)
