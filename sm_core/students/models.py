# sm_core/students/models.py
from django.db import models

from sm_core.common.models import TenantScopedModel


class Parent(TenantScopedModel):
    """Guardian contact; not a login identity."""
    full_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(max_length=100, blank=True, default="")
    address = models.TextField(blank=True, default="")
    relationship = models.CharField(max_length=50, blank=True, default="")

    class Meta:
        db_table = "parents"
        indexes = [
            models.Index(fields=["tenant_id", "full_name"]),
        ]

    def __str__(self) -> str:
        return self.full_name


class Student(TenantScopedModel):
    """
    Enrolment record of a tenant member. student_number is unique per
    school; the TenantUser must belong to the same tenant.
    """
    tenant_user = models.ForeignKey(
        "iam.TenantUser",
        on_delete=models.CASCADE,
        related_name="student_profiles",
    )

    student_number = models.CharField(max_length=50)
    admission_date = models.DateField()

    school_class = models.ForeignKey(
        "academics.SchoolClass",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        db_column="class_id",
        related_name="students",
    )
    parent = models.ForeignKey(
        Parent,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
    )

    class Meta:
        db_table = "students"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "student_number"],
                name="uq_student_tenant_number",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "school_class"]),
            models.Index(fields=["tenant_id", "parent"]),
        ]

    def __str__(self) -> str:
        return self.student_number
