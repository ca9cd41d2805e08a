# sm_core/tests/helpers.py
from __future__ import annotations

from datetime import date

from sm_core.iam.models import Role, TenantUser, TenantUserRole, User
from sm_core.iam.tokens import TokenService
from sm_core.students.models import Student


def scoped(tenant):
    return {"HTTP_X_TENANT_ID": str(tenant.id)}


def bearer(token: str):
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


def token_for(user, tenant=None, role: str = "", **kwargs) -> str:
    return TokenService.generate(
        user_id=user.id,
        username=user.username,
        email=user.email,
        tenant_id=tenant.id if tenant is not None else None,
        role=role,
        **kwargs,
    ).token


def make_user(username: str, *, email: str | None = None, password: str = "secret123", **extra) -> User:
    return User.objects.create_user(
        username=username,
        email=email or f"{username}@example.com",
        password=password,
        full_name=extra.pop("full_name", username.title()),
        **extra,
    )


def make_member(tenant, user, role_name: str | None = None, *, is_active: bool = True) -> TenantUser:
    membership = TenantUser.objects.create(tenant=tenant, user=user, is_active=is_active)
    if role_name:
        role, _ = Role.objects.get_or_create(tenant=tenant, name=role_name)
        TenantUserRole.objects.create(tenant_user=membership, role=role)
    return membership


def make_student(tenant, number: str, **fields):
    member = make_member(tenant, make_user(f"student_{number.lower()}"), "Student")
    return Student.objects.create(
        tenant_id=tenant.id,
        tenant_user=member,
        student_number=number,
        admission_date=fields.pop("admission_date", date(2024, 9, 1)),
        **fields,
    )
