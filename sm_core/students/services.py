# sm_core/students/services.py
from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from sm_core.academics.selectors import classes
from sm_core.common.api.exceptions import NotFound
from sm_core.common.api.pagination import Page, PageParams
from sm_core.common.services import TenantCrudService
from sm_core.iam.services.membership import require_tenant_user
from sm_core.students.selectors import parents, students, students_in_class, students_of_parent


class ParentService(TenantCrudService):
    repository = parents
    entity = "parent"


class StudentService(TenantCrudService):
    repository = students
    entity = "student"
    unique_fields = (("student_number", "student number already exists"),)
    references = (
        ("school_class_id", classes, "class not found"),
        ("parent_id", parents, "parent not found"),
    )

    @classmethod
    def validate_create(cls, *, tenant_id: UUID, data: dict[str, Any]) -> None:
        require_tenant_user(tenant_id=tenant_id, tenant_user_id=data["tenant_user_id"])

    @classmethod
    def list_by_class(cls, *, tenant_id: UUID, class_id: UUID, params: PageParams,
                      filters: Mapping[str, Any] | None = None) -> Page:
        if not classes.exists(tenant_id, pk=class_id):
            raise NotFound("class not found")
        return students.page(
            tenant_id, params, filters,
            queryset=students_in_class(tenant_id=tenant_id, class_id=class_id),
        )

    @classmethod
    def list_by_parent(cls, *, tenant_id: UUID, parent_id: UUID, params: PageParams,
                       filters: Mapping[str, Any] | None = None) -> Page:
        if not parents.exists(tenant_id, pk=parent_id):
            raise NotFound("parent not found")
        return students.page(
            tenant_id, params, filters,
            queryset=students_of_parent(tenant_id=tenant_id, parent_id=parent_id),
        )
