# sm_core/audit/models.py
import uuid

from django.db import models


class AuditAction(models.TextChoices):
    INSERT = "INSERT", "Insert"
    UPDATE = "UPDATE", "Update"
    DELETE = "DELETE", "Delete"


class AuditLog(models.Model):
    """
    Immutable record of a write to a tenant-scoped table.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant_id = models.UUIDField(db_index=True)
    user_id = models.UUIDField(null=True, blank=True)

    table_name = models.CharField(max_length=100, db_index=True)
    record_id = models.UUIDField(null=True, blank=True)
    action = models.CharField(max_length=10, choices=AuditAction.choices)

    old_data = models.JSONField(null=True, blank=True)
    new_data = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "audit_logs"
        indexes = [
            models.Index(fields=["tenant_id", "created_at"]),
            models.Index(fields=["table_name", "record_id"]),
        ]
