# sm_core/common/repository.py
from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, Mapping, Optional, Sequence, Type, TypeVar
from uuid import UUID

from django.db import IntegrityError, models
from django.db.models import Q, QuerySet

from sm_core.common.api.exceptions import ValidationFailed, flatten_validation_errors
from sm_core.common.api.pagination import Page, PageMeta, PageParams

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=models.Model)


class TenantRepository(Generic[M]):
    """
    Tenant-filtered data access for one model.

    Every query starts from `scoped(tenant_id)`; missing rows come back as
    None, integrity failures are logged with the operation name and re-raised.
    """

    def __init__(
        self,
        model: Type[M],
        *,
        tenant_lookup: str = "tenant_id",
        search_fields: Sequence[str] = (),
        ordering_fields: Sequence[str] = (),
        select_related: Sequence[str] = (),
        filterset_class=None,
    ):
        self.model = model
        self.tenant_lookup = tenant_lookup
        self.search_fields = tuple(search_fields)
        self.ordering_fields = tuple(ordering_fields)
        self.select_related = tuple(select_related)
        self.filterset_class = filterset_class

    @property
    def label(self) -> str:
        return self.model._meta.db_table

    def scoped(self, tenant_id: UUID) -> QuerySet[M]:
        qs = self.model.objects.filter(**{self.tenant_lookup: tenant_id})
        if self.select_related:
            qs = qs.select_related(*self.select_related)
        return qs

    # -----------------------------
    # writes
    # -----------------------------

    def create(self, tenant_id: UUID, **fields: Any) -> M:
        try:
            return self.model.objects.create(tenant_id=tenant_id, **fields)
        except IntegrityError:
            logger.error("integrity error", extra={"operation": f"{self.label}.create"})
            raise

    def update(self, obj: M, **fields: Any) -> M:
        for name, value in fields.items():
            setattr(obj, name, value)
        try:
            obj.save()
        except IntegrityError:
            logger.error("integrity error", extra={"operation": f"{self.label}.update", "id": str(obj.pk)})
            raise
        return obj

    def delete(self, obj: M) -> None:
        obj.delete()

    def bulk_delete(self, tenant_id: UUID, ids: Iterable[UUID]) -> int:
        _, per_model = self.scoped(tenant_id).filter(pk__in=list(ids)).delete()
        return per_model.get(self.model._meta.label, 0)

    # -----------------------------
    # reads
    # -----------------------------

    def get_by_id(self, tenant_id: UUID, obj_id: UUID) -> Optional[M]:
        return self.scoped(tenant_id).filter(pk=obj_id).first()

    def get_by(self, tenant_id: UUID, **business_key: Any) -> Optional[M]:
        return self.scoped(tenant_id).filter(**business_key).first()

    def exists(self, tenant_id: UUID, *, exclude_id: UUID | None = None, **business_key: Any) -> bool:
        qs = self.scoped(tenant_id).filter(**business_key)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        return qs.exists()

    def ids_in_tenant(self, tenant_id: UUID, ids: Iterable[UUID]) -> set[UUID]:
        return set(self.scoped(tenant_id).filter(pk__in=list(ids)).values_list("pk", flat=True))

    def search(self, qs: QuerySet[M], term: str) -> QuerySet[M]:
        term = (term or "").strip()
        if not term or not self.search_fields:
            return qs
        cond = Q()
        for field in self.search_fields:
            cond |= Q(**{f"{field}__icontains": term})
        return qs.filter(cond)

    def filterset_kwargs(self, tenant_id: UUID) -> dict[str, Any]:
        """Extra FilterSet arguments; filters that join back to tenant rows need the tenant."""
        return {}

    def apply_filters(
        self, qs: QuerySet[M], filters: Optional[Mapping[str, Any]], tenant_id: UUID
    ) -> QuerySet[M]:
        if self.filterset_class is None or filters is None:
            return qs
        fs = self.filterset_class(data=filters, queryset=qs, **self.filterset_kwargs(tenant_id))
        if not fs.is_valid():
            raise ValidationFailed(flatten_validation_errors(fs.errors))
        return fs.qs

    def page(
        self,
        tenant_id: UUID,
        params: PageParams,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        queryset: QuerySet[M] | None = None,
    ) -> Page[M]:
        qs = queryset if queryset is not None else self.scoped(tenant_id)
        qs = self.apply_filters(qs, filters, tenant_id)
        qs = self.search(qs, params.search)

        total = qs.count()
        rows = list(qs.order_by(params.ordering, "pk")[params.offset:params.offset + params.limit])
        return Page(items=rows, meta=PageMeta.build(params, total))
