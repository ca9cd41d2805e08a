# sm_core/attendance/models.py
from django.db import models

from sm_core.common.models import TenantScopedModel


class AttendanceStatus(models.TextChoices):
    PRESENT = "present", "Present"
    ABSENT = "absent", "Absent"
    LATE = "late", "Late"
    EXCUSED = "excused", "Excused"


class Attendance(TenantScopedModel):
    """One row per student per day."""
    student = models.ForeignKey(
        "students.Student",
        on_delete=models.CASCADE,
        related_name="attendance",
    )
    attendance_date = models.DateField()
    status = models.CharField(max_length=10, choices=AttendanceStatus.choices, db_index=True)
    remarks = models.TextField(blank=True, default="")

    class Meta:
        db_table = "attendance"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "student", "attendance_date"],
                name="uq_attendance_student_date",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "attendance_date"]),
        ]
