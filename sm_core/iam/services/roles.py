# sm_core/iam/services/roles.py
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction

from sm_core.common.permissions import DEFAULT_ROLES
from sm_core.iam.models import Role, TenantUser, TenantUserRole, canonical_role_name

logger = logging.getLogger(__name__)


@transaction.atomic
def ensure_default_roles(*, tenant_id: UUID, names: Iterable[str] = DEFAULT_ROLES) -> int:
    """Create any missing role of `names` in the tenant. Returns how many were new."""
    created = 0
    for name in names:
        _, was_created = Role.objects.get_or_create(tenant_id=tenant_id, name=canonical_role_name(name))
        created += 1 if was_created else 0
    if created:
        logger.info("default roles created", extra={"count": created, "requested_tenant": str(tenant_id)})
    return created


@transaction.atomic
def grant_role(*, tenant_id: UUID, user_id: UUID, role_name: str) -> TenantUserRole:
    """Make `user_id` an active member of the tenant holding `role_name`."""
    role, _ = Role.objects.get_or_create(tenant_id=tenant_id, name=canonical_role_name(role_name))
    membership, _ = TenantUser.objects.get_or_create(tenant_id=tenant_id, user_id=user_id)
    if not membership.is_active:
        membership.is_active = True
        membership.save(update_fields=["is_active"])
    assignment, _ = TenantUserRole.objects.get_or_create(tenant_user=membership, role=role)
    return assignment
