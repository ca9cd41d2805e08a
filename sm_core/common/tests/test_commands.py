# sm_core/common/tests/test_commands.py
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from sm_core.common.permissions import DEFAULT_ROLES
from sm_core.iam.models import Role, TenantUserRole
from sm_core.iam.selectors import get_membership
from sm_core.tenants.models import Tenant
from sm_core.tests.helpers import make_user

pytestmark = pytest.mark.django_db


def test_create_tenant_with_admin():
    owner = make_user("owner", email="owner@school.test")
    out = StringIO()

    call_command("create_tenant", "East High", "--domain", "East.Example.com", "--admin-email", "OWNER@school.test",
                 stdout=out)

    tenant = Tenant.objects.get(name="East High")
    assert tenant.domain == "east.example.com"
    assert tenant.created_by_id == owner.id
    assert "Tenant created" in out.getvalue()
    assert set(Role.objects.filter(tenant=tenant).values_list("name", flat=True)) == set(DEFAULT_ROLES)

    membership = get_membership(tenant_id=tenant.id, user_id=owner.id)
    assert membership.is_active
    assert TenantUserRole.objects.get(tenant_user=membership).role.name == "Admin"


def test_create_tenant_rejects_taken_domain(tenant):
    with pytest.raises(CommandError, match="domain already in use"):
        call_command("create_tenant", "Copycat", "--domain", tenant.domain, stdout=StringIO())


def test_create_tenant_unknown_admin():
    with pytest.raises(CommandError):
        call_command("create_tenant", "Nobody's School", "--admin-email", "ghost@x.test", stdout=StringIO())
    assert not Tenant.objects.exists()


def test_ensure_roles_is_idempotent():
    Tenant.objects.create(name="Bare")
    out = StringIO()

    call_command("ensure_roles", stdout=out)
    assert f"Newly created: {len(DEFAULT_ROLES)}" in out.getvalue()

    out = StringIO()
    call_command("ensure_roles", stdout=out)
    assert "Newly created: 0" in out.getvalue()


def test_ensure_roles_unknown_tenant():
    with pytest.raises(CommandError):
        call_command("ensure_roles", "--tenant", "9b2f7a53-0000-4000-8000-000000000000", stdout=StringIO())


def test_ensure_roles_single_tenant(tenant, other_tenant):
    Role.objects.filter(tenant=tenant, name="Parent").delete()
    Role.objects.filter(tenant=other_tenant, name="Parent").delete()
    out = StringIO()

    call_command("ensure_roles", "--tenant", str(tenant.id), stdout=out)

    assert "Newly created: 1" in out.getvalue()
    assert Role.objects.filter(tenant=tenant, name="Parent").exists()
    assert not Role.objects.filter(tenant=other_tenant, name="Parent").exists()


def test_ensure_roles_rejects_malformed_id():
    with pytest.raises(CommandError, match="invalid tenant ID"):
        call_command("ensure_roles", "--tenant", "not-a-uuid", stdout=StringIO())
