# sm_core/iam/tests/test_auth_api.py
from datetime import timedelta

import pytest

from sm_core.iam.models import Role, TenantUser, TenantUserRole, User
from sm_core.iam.tokens import TokenService
from sm_core.tests.helpers import bearer, make_member, make_user

pytestmark = pytest.mark.django_db

LOGIN_FAILED = {"success": False, "message": "Login failed", "error": "invalid email or password"}


def _register(client, **overrides):
    payload = {
        "email": "u@x",
        "username": "newuser",
        "password": "pw1234",
        "full_name": "New User",
        **overrides,
    }
    return client.post("/v1/auth/register", payload, format="json")


def test_register_creates_user(api_client):
    r = _register(api_client)
    assert r.status_code == 201, r.content
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["username"] == "newuser"
    assert "password" not in body["data"]
    assert User.objects.filter(username="newuser").exists()


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"email": "other@x"}, "username already exists"),
        ({"username": "someoneelse", "email": "U@X"}, "email already exists"),
    ],
)
def test_register_conflict_leaves_no_new_row(api_client, overrides, error):
    assert _register(api_client).status_code == 201
    before = User.objects.count()

    r = _register(api_client, **overrides)

    assert r.status_code == 409
    assert r.json() == {"success": False, "message": "Registration failed", "error": error}
    assert User.objects.count() == before


def test_register_validation_failure_is_400(api_client):
    r = _register(api_client, password="123", username="ab")
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert "password" in body["error"] and "username" in body["error"]


def test_login_failures_are_indistinguishable(api_client):
    make_user("known", email="known@x", password="right-pw")
    make_user("sleepy", email="inactive@x", password="right-pw", is_active=False)

    responses = [
        api_client.post("/v1/auth/login", {"email": "unknown@x", "password": "anything"}, format="json"),
        api_client.post("/v1/auth/login", {"email": "inactive@x", "password": "right-pw"}, format="json"),
        api_client.post("/v1/auth/login", {"email": "known@x", "password": "wrong-pw"}, format="json"),
    ]

    assert {r.status_code for r in responses} == {401}
    assert {r.content for r in responses} == {responses[0].content}
    assert responses[0].json() == LOGIN_FAILED


def test_two_phase_auth(api_client, tenant):
    assert _register(api_client).status_code == 201
    user = User.objects.get(username="newuser")
    make_member(tenant, user, "Admin")

    r = api_client.post("/v1/auth/login", {"email": "u@x", "password": "pw1234"}, format="json")
    assert r.status_code == 200, r.content
    assert r.json()["message"] == "Login successful"
    t1 = r.json()["data"]["token"]
    assert TokenService.validate(t1).tenant_id is None

    # no-tenant token on a domain endpoint
    r = api_client.get("/v1/users", **bearer(t1))
    assert r.status_code == 400
    assert r.json()["message"] == "Tenant ID required"

    r = api_client.get("/v1/auth/tenants", **bearer(t1))
    assert r.status_code == 200
    tenants = r.json()["data"]
    assert [t["tenant"]["id"] for t in tenants] == [str(tenant.id)]
    assert tenants[0]["roles"] == ["Admin"]

    r = api_client.post("/v1/auth/select-tenant", {"tenant_id": str(tenant.id)}, format="json", **bearer(t1))
    assert r.status_code == 200, r.content
    data = r.json()["data"]
    assert data["role"] == "Admin"
    assert data["tenant"] == {"id": str(tenant.id), "name": tenant.name}
    t2 = data["token"]
    assert TokenService.validate(t2).tenant_id == tenant.id

    r = api_client.get("/v1/users", **bearer(t2))
    assert r.status_code == 200, r.content


def test_select_tenant_without_membership_is_403(api_client, tenant):
    user = make_user("drifter")
    r = api_client.post(
        "/v1/auth/select-tenant",
        {"tenant_id": str(tenant.id)},
        format="json",
        **bearer(TokenService.generate(user_id=user.id, username=user.username, email=user.email).token),
    )
    assert r.status_code == 403
    assert r.json()["message"] == "Failed to select tenant"


def test_select_tenant_picks_earliest_assigned_role(api_client, tenant):
    user = make_user("multi")
    membership = make_member(tenant, user, "Teacher")
    later = TenantUserRole.objects.create(tenant_user=membership, role=Role.objects.get(tenant=tenant, name="Admin"))
    TenantUserRole.objects.filter(pk=later.pk).update(created_at=later.created_at + timedelta(minutes=1))

    token = TokenService.generate(user_id=user.id, username=user.username, email=user.email).token
    r = api_client.post("/v1/auth/select-tenant", {"tenant_id": str(tenant.id)}, format="json", **bearer(token))
    assert r.json()["data"]["role"] == "Teacher"


def test_change_password(api_client):
    user = make_user("changer", password="old-pass")
    token = TokenService.generate(user_id=user.id, username=user.username, email=user.email).token

    r = api_client.post(
        "/v1/auth/change-password",
        {"current_password": "wrong", "new_password": "new-pass"},
        format="json",
        **bearer(token),
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Failed to change password"

    r = api_client.post(
        "/v1/auth/change-password",
        {"current_password": "old-pass", "new_password": "new-pass"},
        format="json",
        **bearer(token),
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Password changed successfully"}
    user.refresh_from_db()
    assert user.check_password("new-pass")


def test_token_of_deactivated_user_is_rejected(api_client):
    user = make_user("gone")
    token = TokenService.generate(user_id=user.id, username=user.username, email=user.email).token
    User.objects.filter(pk=user.pk).update(is_active=False)

    r = api_client.get("/v1/auth/tenants", **bearer(token))
    assert r.status_code == 401


def test_inactive_membership_hides_tenant(api_client, tenant):
    user = make_user("paused")
    make_member(tenant, user, "Teacher", is_active=False)
    token = TokenService.generate(user_id=user.id, username=user.username, email=user.email).token

    r = api_client.get("/v1/auth/tenants", **bearer(token))
    assert r.json()["data"] == []
    assert TenantUser.objects.filter(user=user).count() == 1
