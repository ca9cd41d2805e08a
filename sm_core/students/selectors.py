# sm_core/students/selectors.py
from __future__ import annotations

from uuid import UUID

import django_filters
from django.db.models import QuerySet

from sm_core.common.repository import TenantRepository
from sm_core.students.models import Parent, Student


class StudentFilter(django_filters.FilterSet):
    class_id = django_filters.UUIDFilter(field_name="school_class_id")
    parent_id = django_filters.UUIDFilter(field_name="parent_id")

    class Meta:
        model = Student
        fields = ["class_id", "parent_id"]


students = TenantRepository(
    Student,
    search_fields=("student_number", "tenant_user__user__full_name", "tenant_user__user__email"),
    ordering_fields=("student_number", "admission_date", "updated_at"),
    select_related=("tenant_user__user",),
    filterset_class=StudentFilter,
)

parents = TenantRepository(
    Parent,
    search_fields=("full_name", "phone", "email"),
    ordering_fields=("full_name", "relationship", "updated_at"),
)


def students_in_class(*, tenant_id: UUID, class_id: UUID) -> QuerySet[Student]:
    return students.scoped(tenant_id).filter(school_class_id=class_id)


def students_of_parent(*, tenant_id: UUID, parent_id: UUID) -> QuerySet[Student]:
    return students.scoped(tenant_id).filter(parent_id=parent_id)
