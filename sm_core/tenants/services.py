# sm_core/tenants/services.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.db import transaction

from sm_core.common.api.exceptions import Conflict, ValidationFailed
from sm_core.tenants.models import SubscriptionStatus, Tenant


class TenantService:
    """
    All Tenant mutations live here (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def create(
        *,
        name: str,
        domain: Optional[str] = None,
        plan_id: Optional[UUID] = None,
        subscription_status: str = SubscriptionStatus.ACTIVE,
        created_by_id: Optional[UUID] = None,
    ) -> Tenant:
        name = (name or "").strip()
        domain = (domain or "").strip().lower() or None

        if not name:
            raise ValidationFailed("name: This field is required.")

        if subscription_status not in SubscriptionStatus.values:
            raise ValidationFailed(
                f"subscription_status: must be one of {', '.join(SubscriptionStatus.values)}"
            )

        if domain and Tenant.objects.filter(domain=domain).exists():
            raise Conflict("domain already in use")

        return Tenant.objects.create(
            name=name,
            domain=domain,
            plan_id=plan_id,
            subscription_status=subscription_status,
            created_by_id=created_by_id,
        )

