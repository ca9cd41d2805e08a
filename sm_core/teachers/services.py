# sm_core/teachers/services.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from sm_core.common.services import TenantCrudService
from sm_core.iam.services.membership import require_tenant_user
from sm_core.teachers.selectors import teachers


class TeacherService(TenantCrudService):
    repository = teachers
    entity = "teacher"
    unique_fields = (("employee_number", "employee number already exists"),)

    @classmethod
    def validate_create(cls, *, tenant_id: UUID, data: dict[str, Any]) -> None:
        require_tenant_user(tenant_id=tenant_id, tenant_user_id=data["tenant_user_id"])

    @classmethod
    def validate_update(cls, *, tenant_id: UUID, obj, data: dict[str, Any]) -> None:
        if data.get("tenant_user_id") and data["tenant_user_id"] != obj.tenant_user_id:
            require_tenant_user(tenant_id=tenant_id, tenant_user_id=data["tenant_user_id"])
