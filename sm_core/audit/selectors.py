# sm_core/audit/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from sm_core.audit.models import AuditLog


def list_audit_logs(
    *,
    tenant_id: UUID,
    table_name: str | None = None,
    record_id: UUID | None = None,
    action: str | None = None,
) -> QuerySet[AuditLog]:
    qs = AuditLog.objects.filter(tenant_id=tenant_id)

    if table_name:
        qs = qs.filter(table_name=table_name)
    if record_id:
        qs = qs.filter(record_id=record_id)
    if action:
        qs = qs.filter(action=action)

    return qs.order_by("-created_at")
