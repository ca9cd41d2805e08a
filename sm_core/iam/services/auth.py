# sm_core/iam/services/auth.py
"""
Two-phase authentication:

    login (email + password) -> token without tenant
    select-tenant            -> token scoped to one tenant, carrying the role

Domain endpoints only accept the second kind (RequireTenant permission).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from sm_core.common.api.exceptions import Conflict, Forbidden, InvalidCredentials, NotFound, Unauthorized
from sm_core.iam.models import TenantUser, User
from sm_core.iam.selectors import email_taken, username_taken
from sm_core.iam.services.membership import get_active_membership, list_user_tenants, primary_role_name
from sm_core.iam.tokens import IssuedToken, TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    issued: IssuedToken
    user: User


@dataclass(frozen=True)
class TenantSelection:
    issued: IssuedToken
    membership: TenantUser
    role: str


class AuthService:
    @staticmethod
    @transaction.atomic
    def register(
        *,
        email: str,
        username: str,
        password: str,
        full_name: str,
        phone: Optional[str] = None,
    ) -> User:
        email = email.strip()
        username = username.strip()

        if username_taken(username):
            logger.warning("registration with existing username", extra={"username": username})
            raise Conflict("username already exists", title="Registration failed")

        if email_taken(email):
            logger.warning("registration with existing email")
            raise Conflict("email already exists", title="Registration failed")

        try:
            return User.objects.create_user(
                username=username,
                email=email,
                password=password,
                full_name=full_name,
                phone=phone or None,
                is_active=True,
            )
        except IntegrityError:
            # concurrent registration won the race
            raise Conflict("username or email already exists", title="Registration failed")

    @staticmethod
    def login(*, email: str, password: str) -> LoginResult:
        user = User.objects.filter(email__iexact=(email or "").strip()).first()

        if user is None:
            # hash anyway so response time does not reveal unknown accounts
            User().set_password(password)
            logger.warning("login failed: unknown email")
            raise InvalidCredentials()

        password_ok = user.check_password(password)
        if not password_ok or not user.is_active:
            logger.warning(
                "login failed",
                extra={"account_id": str(user.id), "reason": "inactive" if password_ok else "bad_password"},
            )
            raise InvalidCredentials()

        issued = TokenService.generate(
            user_id=user.id,
            username=user.username,
            email=user.email,
        )
        logger.info("login ok", extra={"account_id": str(user.id)})
        return LoginResult(issued=issued, user=user)

    @staticmethod
    def get_user_tenants(*, user_id: UUID) -> list[dict]:
        return list_user_tenants(user_id)

    @staticmethod
    def select_tenant(*, user_id: UUID, tenant_id: UUID) -> TenantSelection:
        membership = get_active_membership(user_id=user_id, tenant_id=tenant_id)
        if membership is None:
            logger.warning(
                "tenant selection denied",
                extra={"account_id": str(user_id), "requested_tenant": str(tenant_id)},
            )
            raise Forbidden("user does not have access to this tenant", title="Failed to select tenant")

        role = primary_role_name(membership.id)
        user = membership.user
        issued = TokenService.generate(
            user_id=user.id,
            username=user.username,
            email=user.email,
            tenant_id=membership.tenant_id,
            role=role,
        )
        return TenantSelection(issued=issued, membership=membership, role=role)

    @staticmethod
    @transaction.atomic
    def change_password(*, user_id: UUID, current_password: str, new_password: str) -> None:
        user = User.objects.select_for_update().filter(pk=user_id).first()
        if user is None:
            raise NotFound("user not found", title="Failed to change password")

        if not user.check_password(current_password):
            logger.warning("change password: current password mismatch", extra={"account_id": str(user_id)})
            raise Unauthorized("current password is incorrect", title="Failed to change password")

        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
