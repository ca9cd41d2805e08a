# sm_core/iam/auth.py

from __future__ import annotations

import logging

from rest_framework_simplejwt.authentication import JWTAuthentication

from sm_core.common import context
from sm_core.common.api.exceptions import InvalidToken
from sm_core.common.middleware import is_tenant_scoped_path, resolve_tenant
from sm_core.iam.models import User
from sm_core.iam.tokens import TokenClaims, TokenService

logger = logging.getLogger(__name__)


class BearerTokenAuthentication(JWTAuthentication):
    """
    Authorization: Bearer <token>

    - no header -> anonymous (protected views answer 401)
    - malformed header / bad token / unknown or inactive user -> 401
    - request.auth is the TokenClaims

    On tenant-scoped paths the tenant candidate recorded by
    TenantResolutionMiddleware is resolved only after the token checks
    out: a non-UUID candidate is a 400, a tenant other than the token's is
    a 403, no candidate means the token's tenant is adopted.
    """

    def authenticate(self, request):
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return None

        raw = TokenService.extract_from_header(header)
        claims = TokenService.validate(raw)
        user = self.get_claims_user(claims)

        self.enforce_tenant(request, claims)
        context.update(user_id=user.id, role=claims.role or None)
        return user, claims

    def get_claims_user(self, claims: TokenClaims) -> User:
        user = User.objects.filter(pk=claims.user_id).first()
        if user is None or not user.is_active:
            logger.warning("token user not found or inactive", extra={"account_id": str(claims.user_id)})
            raise InvalidToken("user not found or inactive")
        return user

    def enforce_tenant(self, request, claims: TokenClaims) -> None:
        if not is_tenant_scoped_path(request.path):
            return
        resolve_tenant(request._request, claims.tenant_id)
