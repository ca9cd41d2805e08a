# sm_core/academics/models.py
from django.db import models

from sm_core.common.models import TenantScopedModel


class SchoolClass(TenantScopedModel):
    """
    A class (homeroom group) for one academic year. The name is unique per
    school and year.
    """
    name = models.CharField(max_length=50)
    grade_level = models.PositiveSmallIntegerField(null=True, blank=True)

    homeroom_teacher = models.ForeignKey(
        "teachers.Teacher",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="homeroom_classes",
    )
    academic_year = models.CharField(max_length=20, null=True, blank=True)

    class Meta:
        db_table = "classes"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "name", "academic_year"],
                name="uq_class_tenant_name_year",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "grade_level"]),
        ]

    def __str__(self) -> str:
        return self.name


class Subject(TenantScopedModel):
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=50)
    description = models.TextField(blank=True, default="")
    credit = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = "subjects"
        constraints = [
            models.UniqueConstraint(fields=["tenant_id", "code"], name="uq_subject_tenant_code"),
        ]

    def __str__(self) -> str:
        return f"{self.code} {self.name}"
