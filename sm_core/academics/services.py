# sm_core/academics/services.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from sm_core.academics.selectors import classes, subjects
from sm_core.common.api.exceptions import Conflict
from sm_core.common.services import TenantCrudService
from sm_core.teachers.selectors import teachers


class SchoolClassService(TenantCrudService):
    repository = classes
    entity = "class"
    entity_plural = "classes"
    references = (("homeroom_teacher_id", teachers, "homeroom teacher not found"),)

    @classmethod
    def _check_name(cls, *, tenant_id: UUID, name: str, academic_year, exclude_id: UUID | None = None) -> None:
        if classes.exists(tenant_id, exclude_id=exclude_id, name=name, academic_year=academic_year):
            raise Conflict("class name already exists for this academic year")

    @classmethod
    def validate_create(cls, *, tenant_id: UUID, data: dict[str, Any]) -> None:
        cls._check_name(tenant_id=tenant_id, name=data["name"], academic_year=data.get("academic_year"))

    @classmethod
    def validate_update(cls, *, tenant_id: UUID, obj, data: dict[str, Any]) -> None:
        name = data.get("name", obj.name)
        year = data.get("academic_year", obj.academic_year)
        if (name, year) != (obj.name, obj.academic_year):
            cls._check_name(tenant_id=tenant_id, name=name, academic_year=year, exclude_id=obj.pk)


class SubjectService(TenantCrudService):
    repository = subjects
    entity = "subject"
    unique_fields = (("code", "subject code already exists"),)
