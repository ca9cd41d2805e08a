# sm_core/grades/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from sm_core.common.models import TenantScopedModel


class GradeType(models.TextChoices):
    ASSIGNMENT = "assignment", "Assignment"
    MIDTERM = "midterm", "Midterm"
    FINAL = "final", "Final"
    OTHER = "other", "Other"


class Grade(TenantScopedModel):
    student = models.ForeignKey("students.Student", on_delete=models.CASCADE, related_name="grades")
    subject = models.ForeignKey("academics.Subject", on_delete=models.CASCADE, related_name="grades")

    grade_type = models.CharField(max_length=16, choices=GradeType.choices)
    score = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    remarks = models.TextField(blank=True, default="")

    class Meta:
        db_table = "grades"
        indexes = [
            models.Index(fields=["tenant_id", "student", "subject"]),
        ]
