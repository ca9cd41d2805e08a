# sm_core/teachers/models.py
from django.db import models

from sm_core.common.models import TenantScopedModel


class Teacher(TenantScopedModel):
    """
    Staff profile of a tenant member. employee_number is unique per school.
    """
    tenant_user = models.ForeignKey(
        "iam.TenantUser",
        on_delete=models.CASCADE,
        related_name="teacher_profiles",
    )

    employee_number = models.CharField(max_length=50, null=True, blank=True)
    hire_date = models.DateField(null=True, blank=True)
    qualification = models.CharField(max_length=255, blank=True, default="")
    position = models.CharField(max_length=100, blank=True, default="")

    class Meta:
        db_table = "teachers"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "employee_number"],
                name="uq_teacher_tenant_employee_number",
            ),
        ]

    def __str__(self) -> str:
        return self.employee_number or str(self.id)
