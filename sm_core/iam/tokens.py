# sm_core/iam/tokens.py
"""
Bearer token issue/verify on top of djangorestframework-simplejwt.

Claims: user_id, tenant_id (absent = no tenant selected), username, email,
role, iat, exp. Signature algorithm is pinned by SIMPLE_JWT["ALGORITHM"];
the token header is never trusted to pick it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from sm_core.common.api.exceptions import InvalidToken, MalformedAuth, MissingAuth

ZERO_UUID = UUID(int=0)

CLAIM_TENANT = "tenant_id"
CLAIM_USERNAME = "username"
CLAIM_EMAIL = "email"
CLAIM_ROLE = "role"


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    user_id: UUID
    tenant_id: Optional[UUID]
    username: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime

    @property
    def has_tenant(self) -> bool:
        return self.tenant_id is not None


def _epoch_to_dt(value) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def _normalise_tenant(tenant_id) -> Optional[UUID]:
    if tenant_id in (None, ""):
        return None
    value = tenant_id if isinstance(tenant_id, UUID) else UUID(str(tenant_id))
    return None if value == ZERO_UUID else value


class TokenService:
    @staticmethod
    def generate(
        *,
        user_id: UUID,
        username: str,
        email: str,
        tenant_id: Optional[UUID] = None,
        role: str = "",
        lifetime: Optional[timedelta] = None,
    ) -> IssuedToken:
        token = AccessToken()
        if lifetime is not None:
            token.set_exp(lifetime=lifetime)

        token[api_settings.USER_ID_CLAIM] = str(user_id)
        token[CLAIM_USERNAME] = username
        token[CLAIM_EMAIL] = email
        token[CLAIM_ROLE] = role or ""

        tenant = _normalise_tenant(tenant_id)
        if tenant is not None:
            token[CLAIM_TENANT] = str(tenant)

        return IssuedToken(token=str(token), expires_at=_epoch_to_dt(token["exp"]))

    @staticmethod
    def validate(raw: str) -> TokenClaims:
        try:
            token = AccessToken(raw)
        except TokenError as exc:
            raise InvalidToken(str(exc) or InvalidToken.default_detail)

        payload = token.payload
        try:
            user_id = UUID(str(payload[api_settings.USER_ID_CLAIM]))
            tenant_id = _normalise_tenant(payload.get(CLAIM_TENANT))
            username = str(payload[CLAIM_USERNAME])
            email = str(payload[CLAIM_EMAIL])
            issued_at = _epoch_to_dt(payload["iat"])
            expires_at = _epoch_to_dt(payload["exp"])
        except (KeyError, TypeError, ValueError):
            raise InvalidToken("token payload is malformed")

        return TokenClaims(
            user_id=user_id,
            tenant_id=tenant_id,
            username=username,
            email=email,
            role=str(payload.get(CLAIM_ROLE) or ""),
            issued_at=issued_at,
            expires_at=expires_at,
        )

    @staticmethod
    def extract_from_header(header: Optional[str]) -> str:
        """'Bearer <token>' -> '<token>'. Scheme is case-insensitive, exactly one space."""
        if not header:
            raise MissingAuth()
        parts = header.split(" ")
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
            raise MalformedAuth()
        return parts[1]
