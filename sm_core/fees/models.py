# sm_core/fees/models.py
from django.core.validators import MinValueValidator
from django.db import models

from sm_core.common.models import TenantScopedModel


class FeeType(TenantScopedModel):
    """Catalogue entry (tuition, library, ...); name unique per school."""
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    default_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    is_mandatory = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "fee_types"
        constraints = [
            models.UniqueConstraint(fields=["tenant_id", "name"], name="uq_fee_type_tenant_name"),
        ]

    def __str__(self) -> str:
        return self.name


class FeeStatus(models.TextChoices):
    PAID = "paid", "Paid"
    UNPAID = "unpaid", "Unpaid"
    PARTIAL = "partial", "Partial"
    OVERDUE = "overdue", "Overdue"


class StudentFee(TenantScopedModel):
    student = models.ForeignKey("students.Student", on_delete=models.CASCADE, related_name="fees")
    fee_type = models.ForeignKey(FeeType, on_delete=models.CASCADE, related_name="student_fees")

    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    due_date = models.DateField()
    status = models.CharField(max_length=10, choices=FeeStatus.choices, default=FeeStatus.UNPAID, db_index=True)

    payment_date = models.DateField(null=True, blank=True)
    payment_method = models.CharField(max_length=50, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "student_fees"
        indexes = [
            models.Index(fields=["tenant_id", "student", "status"]),
            models.Index(fields=["tenant_id", "due_date"]),
        ]
