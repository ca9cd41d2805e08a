# sm_core/iam/services/membership.py
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sm_core.common.api.exceptions import InvalidInput
from sm_core.iam.models import TenantUser, TenantUserRole

logger = logging.getLogger(__name__)


def is_active_member(*, user_id: UUID, tenant_id: UUID) -> bool:
    """
    User -> (tenant) membership check used by the role gate.
    Both the User and the specific TenantUser must be active.
    """
    return TenantUser.objects.filter(
        tenant_id=tenant_id,
        user_id=user_id,
        is_active=True,
        user__is_active=True,
    ).exists()


def get_active_membership(*, user_id: UUID, tenant_id: UUID) -> Optional[TenantUser]:
    return (
        TenantUser.objects.select_related("tenant", "user")
        .filter(tenant_id=tenant_id, user_id=user_id, is_active=True, user__is_active=True)
        .first()
    )


def role_names(tenant_user_id: UUID) -> list[str]:
    """All roles of a membership, earliest assignment first (ties by name)."""
    return list(
        TenantUserRole.objects.filter(tenant_user_id=tenant_user_id)
        .order_by("created_at", "role__name")
        .values_list("role__name", flat=True)
    )


def primary_role_name(tenant_user_id: UUID) -> str:
    """The role that goes into a tenant-scoped token: the earliest assigned."""
    names = role_names(tenant_user_id)
    return names[0] if names else ""


def list_user_tenants(user_id: UUID) -> list[dict]:
    """
    Active memberships for GET /auth/tenants.

    Canonical membership graph:
      User -> TenantUser -> Tenant (+ TenantUserRole -> Role)
    """
    qs = (
        TenantUser.objects.select_related("tenant")
        .filter(user_id=user_id, is_active=True)
        .order_by("created_at", "tenant__name")
    )

    items: list[dict] = []
    for m in qs:
        t = m.tenant
        items.append(
            {
                "tenant_user_id": str(m.id),
                "tenant": {
                    "id": str(t.id),
                    "name": t.name,
                    "domain": t.domain,
                    "subscription_status": t.subscription_status,
                },
                "roles": role_names(m.id),
            }
        )
    return items


def require_tenant_user(*, tenant_id: UUID, tenant_user_id: UUID) -> TenantUser:
    """
    Domain records (Student, Teacher) attach to a TenantUser of the
    current tenant; anything else is a 400.
    """
    membership = TenantUser.objects.filter(pk=tenant_user_id).first()
    if membership is None:
        logger.warning("tenant user not found", extra={"tenant_user_id": str(tenant_user_id)})
        raise InvalidInput("tenant user not found")
    if membership.tenant_id != tenant_id:
        logger.warning(
            "tenant user belongs to another tenant",
            extra={"tenant_user_id": str(tenant_user_id)},
        )
        raise InvalidInput("tenant user does not belong to this tenant")
    return membership
