# sm_core/attendance/services.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from sm_core.attendance.selectors import attendance
from sm_core.common.api.exceptions import Conflict
from sm_core.common.services import TenantCrudService
from sm_core.students.selectors import students


class AttendanceService(TenantCrudService):
    repository = attendance
    entity = "attendance record"
    references = (("student_id", students, "student not found"),)

    @classmethod
    def _check_day(cls, *, tenant_id: UUID, student_id: UUID, day, exclude_id: UUID | None = None) -> None:
        if attendance.exists(tenant_id, exclude_id=exclude_id, student_id=student_id, attendance_date=day):
            raise Conflict("attendance already recorded for this student on this date")

    @classmethod
    def validate_create(cls, *, tenant_id: UUID, data: dict[str, Any]) -> None:
        cls._check_day(tenant_id=tenant_id, student_id=data["student_id"], day=data["attendance_date"])

    @classmethod
    def validate_update(cls, *, tenant_id: UUID, obj, data: dict[str, Any]) -> None:
        student_id = data.get("student_id", obj.student_id)
        day = data.get("attendance_date", obj.attendance_date)
        if (student_id, day) != (obj.student_id, obj.attendance_date):
            cls._check_day(tenant_id=tenant_id, student_id=student_id, day=day, exclude_id=obj.pk)
