# sm_core/common/permissions.py

from __future__ import annotations

import logging

from rest_framework.permissions import BasePermission

from sm_core.common.api.exceptions import Forbidden, TenantRequired

logger = logging.getLogger(__name__)

# Canonical role names (Role.name is stored title-cased)
ROLE_ADMIN = "Admin"
ROLE_DEVELOPER = "Developer"
ROLE_TEACHER = "Teacher"
ROLE_STAFF = "Staff"
ROLE_STUDENT = "Student"
ROLE_PARENT = "Parent"

DEFAULT_ROLES = (ROLE_ADMIN, ROLE_DEVELOPER, ROLE_TEACHER, ROLE_STAFF, ROLE_STUDENT, ROLE_PARENT)


def token_role(request) -> str:
    claims = getattr(request, "auth", None)
    return (getattr(claims, "role", "") or "").strip()


class RequireTenant(BasePermission):
    """
    Domain endpoints need both a resolved request tenant and a
    tenant-scoped token. A no-tenant token never gets through.
    """

    def has_permission(self, request, view) -> bool:
        claims = getattr(request, "auth", None)
        if getattr(request, "tenant_id", None) is None or getattr(claims, "tenant_id", None) is None:
            raise TenantRequired()
        return True


class RoleGate(BasePermission):
    """
    Allow-list of role names for a collection.

    - role claim compared case-insensitively
    - missing / mismatched role -> 403 Forbidden
    - caller's TenantUser must still be active in the request tenant
    """

    allowed_roles: frozenset[str] = frozenset()

    def has_permission(self, request, view) -> bool:
        role = token_role(request)
        allowed = {r.casefold() for r in self.allowed_roles}

        if not role or role.casefold() not in allowed:
            logger.warning(
                "role denied",
                extra={"role": role or None, "view": view.__class__.__name__},
            )
            raise Forbidden()

        from sm_core.iam.services.membership import is_active_member

        user = request.user
        if not is_active_member(user_id=user.id, tenant_id=request.tenant_id):
            logger.warning("inactive tenant membership", extra={"view": view.__class__.__name__})
            raise Forbidden("tenant membership is not active")

        return True


# Specific gates for each collection

class UserManagementGate(RoleGate):
    allowed_roles = frozenset({ROLE_ADMIN, ROLE_DEVELOPER})


class TeacherManagementGate(RoleGate):
    allowed_roles = frozenset({ROLE_ADMIN, ROLE_DEVELOPER})


class AcademicGate(RoleGate):
    """students, classes, subjects, attendance, grades"""
    allowed_roles = frozenset({ROLE_TEACHER, ROLE_ADMIN, ROLE_DEVELOPER})


class FinanceGate(RoleGate):
    allowed_roles = frozenset({ROLE_STAFF, ROLE_ADMIN, ROLE_DEVELOPER})
