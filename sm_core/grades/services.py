# sm_core/grades/services.py
from __future__ import annotations

from sm_core.academics.selectors import subjects
from sm_core.common.services import TenantCrudService
from sm_core.grades.selectors import grades
from sm_core.students.selectors import students


class GradeService(TenantCrudService):
    repository = grades
    entity = "grade"
    references = (
        ("student_id", students, "student not found"),
        ("subject_id", subjects, "subject not found"),
    )
