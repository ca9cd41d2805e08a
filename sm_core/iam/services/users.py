# sm_core/iam/services/users.py
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from django.db import transaction

from sm_core.audit.services import AuditAction, AuditService
from sm_core.common.api.exceptions import Conflict, InvalidInput
from sm_core.common.services import TenantCrudService, snapshot, split_tenant_ids
from sm_core.iam.models import TenantUser, TenantUserRole, User
from sm_core.iam.selectors import email_taken, get_membership, get_role_in_tenant, members, username_taken

logger = logging.getLogger(__name__)

USER_FIELDS = ("username", "email", "full_name", "phone", "gender", "date_of_birth", "address")


def _check_identity_free(*, username: str | None, email: str | None, exclude_user_id: UUID | None = None) -> None:
    if username and username_taken(username, exclude_user_id=exclude_user_id):
        logger.warning("username already exists", extra={"username": username})
        raise Conflict("username already exists")
    if email and email_taken(email, exclude_user_id=exclude_user_id):
        logger.warning("email already exists")
        raise Conflict("email already exists")


def _role_or_400(*, tenant_id: UUID, role_id: UUID):
    role = get_role_in_tenant(tenant_id=tenant_id, role_id=role_id)
    if role is None:
        logger.warning("role not found in tenant", extra={"role_id": str(role_id)})
        raise InvalidInput("invalid role ID")
    return role


class UserService(TenantCrudService):
    """
    Admin management of a tenant's members.

    User rows are global; what a tenant owns is the TenantUser (and its
    role assignments). Deleting a member removes the membership and only
    drops the User once no tenant references it any more.
    """

    repository = members
    entity = "user"

    @classmethod
    @transaction.atomic
    def create(cls, *, tenant_id: UUID, actor_user_id: UUID | None, data: dict[str, Any]) -> User:
        data = dict(data)
        role_id = data.pop("role_id", None)
        password = data.pop("password")
        is_active = data.pop("is_active", True)

        _check_identity_free(username=data.get("username"), email=data.get("email"))
        role = _role_or_400(tenant_id=tenant_id, role_id=role_id) if role_id else None

        user = User.objects.create_user(password=password, is_active=True, **data)
        membership = TenantUser.objects.create(tenant_id=tenant_id, user=user, is_active=is_active)
        if role is not None:
            TenantUserRole.objects.create(tenant_user=membership, role=role)

        AuditService.log(
            tenant_id=tenant_id,
            user_id=actor_user_id,
            table_name=User._meta.db_table,
            record_id=user.id,
            action=AuditAction.INSERT,
            new_data={**snapshot(user), "password": None, "role_id": str(role.id) if role else None},
        )
        return cls.get(tenant_id=tenant_id, obj_id=user.id)

    @classmethod
    @transaction.atomic
    def update(cls, *, tenant_id: UUID, actor_user_id: UUID | None, obj_id: UUID, data: dict[str, Any]) -> User:
        user = cls.get(tenant_id=tenant_id, obj_id=obj_id)
        membership = get_membership(tenant_id=tenant_id, user_id=user.id)
        before = {**snapshot(user), "password": None}

        data = dict(data)
        role_id = data.pop("role_id", None)
        is_active = data.pop("is_active", None)

        _check_identity_free(
            username=data.get("username") if data.get("username") != user.username else None,
            email=data.get("email") if data.get("email") != user.email else None,
            exclude_user_id=user.id,
        )

        if role_id:
            role = _role_or_400(tenant_id=tenant_id, role_id=role_id)
            TenantUserRole.objects.filter(tenant_user=membership).delete()
            TenantUserRole.objects.create(tenant_user=membership, role=role)

        if is_active is not None and membership.is_active != is_active:
            membership.is_active = is_active
            membership.save(update_fields=["is_active"])

        changes = {k: v for k, v in data.items() if k in USER_FIELDS}
        if changes:
            for name, value in changes.items():
                setattr(user, name, value)
            user.save()

        AuditService.log(
            tenant_id=tenant_id,
            user_id=actor_user_id,
            table_name=User._meta.db_table,
            record_id=user.id,
            action=AuditAction.UPDATE,
            old_data=before,
            new_data={
                **snapshot(user),
                "password": None,
                "role_id": str(role_id) if role_id else None,
                "membership_active": membership.is_active,
            },
        )
        return cls.get(tenant_id=tenant_id, obj_id=user.id)

    @classmethod
    def _remove_member(cls, *, tenant_id: UUID, user_id: UUID) -> None:
        TenantUser.objects.filter(tenant_id=tenant_id, user_id=user_id).delete()
        if not TenantUser.objects.filter(user_id=user_id).exists():
            User.objects.filter(pk=user_id).delete()

    @classmethod
    @transaction.atomic
    def delete(cls, *, tenant_id: UUID, actor_user_id: UUID | None, obj_id: UUID) -> None:
        user = cls.get(tenant_id=tenant_id, obj_id=obj_id)
        before = {**snapshot(user), "password": None}
        cls._remove_member(tenant_id=tenant_id, user_id=user.id)

        AuditService.log(
            tenant_id=tenant_id,
            user_id=actor_user_id,
            table_name=User._meta.db_table,
            record_id=obj_id,
            action=AuditAction.DELETE,
            old_data=before,
        )

    @classmethod
    @transaction.atomic
    def bulk_delete(cls, *, tenant_id: UUID, actor_user_id: UUID | None, ids: list[UUID]) -> dict[str, Any]:
        if not ids:
            raise InvalidInput("no user IDs provided for bulk delete", title="Failed to delete users")

        valid, invalid = split_tenant_ids(cls.repository, tenant_id, ids)
        if invalid:
            logger.warning(
                "some user IDs do not belong to the tenant or do not exist",
                extra={"invalid_ids": [str(i) for i in invalid]},
            )
        if not valid:
            raise InvalidInput("no valid user IDs found for bulk delete in this tenant", title="Failed to delete users")

        for user_id in valid:
            cls._remove_member(tenant_id=tenant_id, user_id=user_id)
            AuditService.log(
                tenant_id=tenant_id,
                user_id=actor_user_id,
                table_name=User._meta.db_table,
                record_id=user_id,
                action=AuditAction.DELETE,
            )

        return {"deleted": len(valid), "invalid_ids": [str(i) for i in invalid]}

