# sm_core/teachers/selectors.py
from __future__ import annotations

from sm_core.common.repository import TenantRepository
from sm_core.teachers.models import Teacher

teachers = TenantRepository(
    Teacher,
    search_fields=("employee_number", "qualification", "position", "tenant_user__user__full_name"),
    ordering_fields=("employee_number", "hire_date", "position", "updated_at"),
    select_related=("tenant_user__user",),
)
