# sm_core/audit/services.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction

from sm_core.audit.models import AuditAction, AuditLog

__all__ = ["AuditAction", "AuditRecord", "AuditService"]


@dataclass(frozen=True)
class AuditRecord:
    tenant_id: UUID
    user_id: Optional[UUID]
    table_name: str
    record_id: Optional[UUID]
    action: str
    old_data: Optional[Dict[str, Any]]
    new_data: Optional[Dict[str, Any]]


class AuditService:
    """
    Central audit writer. Joins the caller's transaction, so an audit row
    only exists if the audited write committed.
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        tenant_id: UUID,
        user_id: Optional[UUID],
        table_name: str,
        record_id: Optional[UUID],
        action: str,
        old_data: Optional[Dict[str, Any]] = None,
        new_data: Optional[Dict[str, Any]] = None,
    ) -> AuditRecord:
        AuditLog.objects.create(
            tenant_id=tenant_id,
            user_id=user_id,
            table_name=table_name,
            record_id=record_id,
            action=action,
            old_data=old_data,
            new_data=new_data,
        )

        return AuditRecord(
            tenant_id=tenant_id,
            user_id=user_id,
            table_name=table_name,
            record_id=record_id,
            action=action,
            old_data=old_data,
            new_data=new_data,
        )
