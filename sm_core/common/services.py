# sm_core/common/services.py
"""
Canonical CRUD service shape shared by the tenant-scoped collections.

Each write runs inside one transaction: validate business rules, write,
record the audit row. Any failure rolls everything back, so no partial
state survives a rejected request.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, Mapping, Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from sm_core.audit.services import AuditAction, AuditService
from sm_core.common.api.exceptions import Conflict, InvalidInput, NotFound
from sm_core.common.api.pagination import Page, PageParams
from sm_core.common.repository import TenantRepository

logger = logging.getLogger(__name__)


def snapshot(obj) -> dict[str, Any]:
    """JSON-safe dict of an instance's concrete fields (FKs as *_id)."""
    out: dict[str, Any] = {}
    for field in obj._meta.concrete_fields:
        value = getattr(obj, field.attname)
        out[field.attname] = value if value is None or isinstance(value, (bool, int, float)) else str(value)
    return out


def split_tenant_ids(repo: TenantRepository, tenant_id: UUID, ids: Iterable[UUID]) -> tuple[list[UUID], list[UUID]]:
    """Partition ids into (in this tenant, foreign or missing), keeping request order."""
    requested = list(dict.fromkeys(ids))
    owned = repo.ids_in_tenant(tenant_id, requested)
    valid = [i for i in requested if i in owned]
    invalid = [i for i in requested if i not in owned]
    return valid, invalid


class TenantCrudService:
    """
    Subclasses set `repository`, `entity` and optionally override the
    `validate_create` / `validate_update` hooks and `unique_fields`.
    """

    repository: ClassVar[TenantRepository]
    entity: ClassVar[str] = "record"
    entity_plural: ClassVar[Optional[str]] = None

    # (field, message) pairs checked for per-tenant uniqueness on create/update
    unique_fields: ClassVar[tuple[tuple[str, str], ...]] = ()

    # (field, repository, message): a non-null value must name a row of this tenant
    references: ClassVar[tuple[tuple[str, TenantRepository, str], ...]] = ()

    @classmethod
    def plural(cls) -> str:
        return cls.entity_plural or f"{cls.entity}s"

    # -----------------------------
    # hooks
    # -----------------------------

    @classmethod
    def validate_create(cls, *, tenant_id: UUID, data: dict[str, Any]) -> None:
        return None

    @classmethod
    def validate_update(cls, *, tenant_id: UUID, obj, data: dict[str, Any]) -> None:
        return None

    @classmethod
    def check_unique(cls, *, tenant_id: UUID, data: Mapping[str, Any], exclude_id: UUID | None = None) -> None:
        for field, message in cls.unique_fields:
            value = data.get(field)
            if value in (None, ""):
                continue
            if cls.repository.exists(tenant_id, exclude_id=exclude_id, **{field: value}):
                logger.warning(
                    "%s uniqueness violation",
                    cls.entity,
                    extra={"field": field, "value": str(value)},
                )
                raise Conflict(message)

    @classmethod
    def check_references(cls, *, tenant_id: UUID, data: Mapping[str, Any]) -> None:
        for field, repo, message in cls.references:
            value = data.get(field)
            if value is None:
                continue
            if not repo.exists(tenant_id, pk=value):
                logger.warning(
                    "%s references a row outside the tenant",
                    cls.entity,
                    extra={"field": field, "value": str(value)},
                )
                raise InvalidInput(message)

    # -----------------------------
    # reads
    # -----------------------------

    @classmethod
    def get(cls, *, tenant_id: UUID, obj_id: UUID):
        obj = cls.repository.get_by_id(tenant_id, obj_id)
        if obj is None:
            raise NotFound(f"{cls.entity} not found")
        return obj

    @classmethod
    def list(cls, *, tenant_id: UUID, params: PageParams, filters: Mapping[str, Any] | None = None) -> Page:
        return cls.repository.page(tenant_id, params, filters)

    # -----------------------------
    # writes
    # -----------------------------

    @classmethod
    @transaction.atomic
    def create(cls, *, tenant_id: UUID, actor_user_id: UUID | None, data: dict[str, Any]):
        cls.check_unique(tenant_id=tenant_id, data=data)
        cls.check_references(tenant_id=tenant_id, data=data)
        cls.validate_create(tenant_id=tenant_id, data=data)

        try:
            obj = cls.repository.create(tenant_id, **data)
        except IntegrityError:
            raise Conflict(f"{cls.entity} already exists")

        AuditService.log(
            tenant_id=tenant_id,
            user_id=actor_user_id,
            table_name=cls.repository.label,
            record_id=obj.pk,
            action=AuditAction.INSERT,
            new_data=snapshot(obj),
        )
        return obj

    @classmethod
    @transaction.atomic
    def update(cls, *, tenant_id: UUID, actor_user_id: UUID | None, obj_id: UUID, data: dict[str, Any]):
        obj = cls.get(tenant_id=tenant_id, obj_id=obj_id)
        before = snapshot(obj)

        changed = {k: v for k, v in data.items() if getattr(obj, k, None) != v}
        cls.check_unique(tenant_id=tenant_id, data=changed, exclude_id=obj.pk)
        cls.check_references(tenant_id=tenant_id, data=changed)
        cls.validate_update(tenant_id=tenant_id, obj=obj, data=data)

        try:
            obj = cls.repository.update(obj, **data)
        except IntegrityError:
            raise Conflict(f"{cls.entity} already exists")

        AuditService.log(
            tenant_id=tenant_id,
            user_id=actor_user_id,
            table_name=cls.repository.label,
            record_id=obj.pk,
            action=AuditAction.UPDATE,
            old_data=before,
            new_data=snapshot(obj),
        )
        return obj

    @classmethod
    @transaction.atomic
    def delete(cls, *, tenant_id: UUID, actor_user_id: UUID | None, obj_id: UUID) -> None:
        obj = cls.get(tenant_id=tenant_id, obj_id=obj_id)
        before = snapshot(obj)
        cls.repository.delete(obj)

        AuditService.log(
            tenant_id=tenant_id,
            user_id=actor_user_id,
            table_name=cls.repository.label,
            record_id=obj_id,
            action=AuditAction.DELETE,
            old_data=before,
        )

    @classmethod
    @transaction.atomic
    def bulk_delete(cls, *, tenant_id: UUID, actor_user_id: UUID | None, ids: list[UUID]) -> dict[str, Any]:
        if not ids:
            raise InvalidInput(
                f"no {cls.entity} IDs provided for bulk delete",
                title=f"Failed to delete {cls.plural()}",
            )

        valid, invalid = split_tenant_ids(cls.repository, tenant_id, ids)

        if invalid:
            logger.warning(
                "some %s IDs do not belong to the tenant or do not exist",
                cls.entity,
                extra={"invalid_ids": [str(i) for i in invalid]},
            )

        if not valid:
            raise InvalidInput(
                f"no valid {cls.entity} IDs found for bulk delete in this tenant",
                title=f"Failed to delete {cls.plural()}",
            )

        deleted = cls.repository.bulk_delete(tenant_id, valid)

        for obj_id in valid:
            AuditService.log(
                tenant_id=tenant_id,
                user_id=actor_user_id,
                table_name=cls.repository.label,
                record_id=obj_id,
                action=AuditAction.DELETE,
            )

        return {"deleted": deleted, "invalid_ids": [str(i) for i in invalid]}
