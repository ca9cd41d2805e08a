# sm_core/fees/selectors.py
from __future__ import annotations

import django_filters

from sm_core.common.repository import TenantRepository
from sm_core.fees.models import FeeStatus, FeeType, StudentFee


class StudentFeeFilter(django_filters.FilterSet):
    student_id = django_filters.UUIDFilter(field_name="student_id")
    status = django_filters.ChoiceFilter(choices=FeeStatus.choices)
    fee_type_id = django_filters.UUIDFilter(field_name="fee_type_id")

    class Meta:
        model = StudentFee
        fields = ["student_id", "status", "fee_type_id"]


class FeeTypeFilter(django_filters.FilterSet):
    is_active = django_filters.BooleanFilter()
    is_mandatory = django_filters.BooleanFilter()

    class Meta:
        model = FeeType
        fields = ["is_active", "is_mandatory"]


fee_types = TenantRepository(
    FeeType,
    search_fields=("name", "description"),
    ordering_fields=("name", "default_amount", "updated_at"),
    filterset_class=FeeTypeFilter,
)

student_fees = TenantRepository(
    StudentFee,
    search_fields=("notes", "payment_method", "fee_type__name", "student__student_number"),
    ordering_fields=("amount", "due_date", "payment_date", "status", "updated_at"),
    select_related=("fee_type",),
    filterset_class=StudentFeeFilter,
)
