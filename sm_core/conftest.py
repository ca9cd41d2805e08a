# sm_core/conftest.py
import pytest
from rest_framework.test import APIClient

from sm_core.iam.services.roles import ensure_default_roles
from sm_core.tenants.models import Tenant
from sm_core.tests.helpers import bearer, make_member, make_user, scoped, token_for


@pytest.fixture
def tenant(db):
    t = Tenant.objects.create(name="North High", domain="north.example.com")
    ensure_default_roles(tenant_id=t.id)
    return t


@pytest.fixture
def other_tenant(db):
    t = Tenant.objects.create(name="South High", domain="south.example.com")
    ensure_default_roles(tenant_id=t.id)
    return t


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(tenant):
    user = make_user("admin")
    make_member(tenant, user, "Admin")
    return user


@pytest.fixture
def admin_client(admin_user, tenant):
    """Tenant-scoped Admin token, X-Tenant-ID set on every request."""
    c = APIClient()
    c.credentials(**bearer(token_for(admin_user, tenant, role="Admin")), **scoped(tenant))
    return c


@pytest.fixture
def client_for(tenant):
    """
    Build a client for a fresh member of `tenant` holding `role`:
        client_for("Teacher")
    """
    counter = {"n": 0}

    def _make(role: str, *, target=None):
        target = target or tenant
        counter["n"] += 1
        user = make_user(f"{role.lower()}{counter['n']}")
        make_member(target, user, role)
        c = APIClient()
        c.credentials(**bearer(token_for(user, target, role=role)), **scoped(target))
        c.user = user
        return c

    return _make


@pytest.fixture
def student_member(tenant):
    """A TenantUser ready to carry a Student record."""
    return make_member(tenant, make_user("pupil"), "Student")
