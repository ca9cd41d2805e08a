# sm_core/iam/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

import django_filters
from django.db.models import Prefetch, QuerySet

from sm_core.common.repository import TenantRepository
from sm_core.iam.models import Role, TenantUser, User


class TenantMemberFilter(django_filters.FilterSet):
    """
    role_id only matches role assignments of the membership in `tenant_id`;
    a role the same user holds in another tenant never counts.
    """

    role_id = django_filters.UUIDFilter(method="filter_role")

    class Meta:
        model = User
        fields = ["role_id"]

    def __init__(self, *args, tenant_id: UUID, **kwargs):
        super().__init__(*args, **kwargs)
        self.tenant_id = tenant_id

    def filter_role(self, queryset, name, value):
        holders = TenantUser.objects.filter(tenant_id=self.tenant_id, role_assignments__role_id=value)
        return queryset.filter(tenant_users__in=holders)


class TenantMemberRepository(TenantRepository[User]):
    """
    Users are global; a tenant sees the ones with a TenantUser row in it.
    Each row comes with `memberships` = [its TenantUser in this tenant].
    """

    def filterset_kwargs(self, tenant_id: UUID) -> dict:
        return {"tenant_id": tenant_id}

    def scoped(self, tenant_id: UUID) -> QuerySet[User]:
        memberships = TenantUser.objects.filter(tenant_id=tenant_id).prefetch_related("role_assignments__role")
        return (
            super()
            .scoped(tenant_id)
            .prefetch_related(Prefetch("tenant_users", queryset=memberships, to_attr="memberships"))
        )


members = TenantMemberRepository(
    User,
    tenant_lookup="tenant_users__tenant_id",
    search_fields=("username", "email", "full_name"),
    ordering_fields=("username", "email", "full_name", "created_at", "updated_at"),
    filterset_class=TenantMemberFilter,
)


def get_membership(*, tenant_id: UUID, user_id: UUID) -> Optional[TenantUser]:
    return TenantUser.objects.filter(tenant_id=tenant_id, user_id=user_id).first()


def get_role_in_tenant(*, tenant_id: UUID, role_id: UUID) -> Optional[Role]:
    return Role.objects.filter(tenant_id=tenant_id, id=role_id).first()


def username_taken(username: str, *, exclude_user_id: UUID | None = None) -> bool:
    qs = User.objects.filter(username=username)
    if exclude_user_id is not None:
        qs = qs.exclude(pk=exclude_user_id)
    return qs.exists()


def email_taken(email: str, *, exclude_user_id: UUID | None = None) -> bool:
    qs = User.objects.filter(email__iexact=email)
    if exclude_user_id is not None:
        qs = qs.exclude(pk=exclude_user_id)
    return qs.exists()
