# sm_core/iam/api/auth.py

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from sm_core.common.api.exceptions import ValidationFailed, flatten_validation_errors
from sm_core.common.api.responses import created, success
from sm_core.iam.api.serializers import (
    ChangePasswordRequestSerializer,
    LoginRequestSerializer,
    RegisteredUserSerializer,
    RegisterRequestSerializer,
    SelectTenantRequestSerializer,
    TokenResponseSerializer,
    UserSummarySerializer,
    UserTenantSerializer,
)
from sm_core.iam.services.auth import AuthService

logger = logging.getLogger(__name__)


def _validated(serializer_class, request) -> dict:
    ser = serializer_class(data=request.data)
    if not ser.is_valid():
        errors = flatten_validation_errors(ser.errors)
        logger.warning("request validation failed", extra={"view": serializer_class.__name__, "errors": errors})
        raise ValidationFailed(errors)
    return dict(ser.validated_data)


class LoginView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: TokenResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        data = _validated(LoginRequestSerializer, request)
        result = AuthService.login(email=data["email"], password=data["password"])
        return success(
            "Login successful",
            {
                "token": result.issued.token,
                "expires_at": result.issued.expires_at.isoformat(),
                "user": UserSummarySerializer(result.user).data,
            },
        )


class RegisterView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    @extend_schema(
        request=RegisterRequestSerializer,
        responses={201: RegisteredUserSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        data = _validated(RegisterRequestSerializer, request)
        user = AuthService.register(**data)
        return created("User registered successfully", RegisteredUserSerializer(user).data)


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=ChangePasswordRequestSerializer,
        responses={200: None},
        tags=["Auth"],
    )
    def post(self, request):
        data = _validated(ChangePasswordRequestSerializer, request)
        AuthService.change_password(
            user_id=request.user.id,
            current_password=data["current_password"],
            new_password=data["new_password"],
        )
        return success("Password changed successfully")


class UserTenantsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserTenantSerializer(many=True)}, tags=["Auth"])
    def get(self, request):
        return success("User tenants retrieved successfully", AuthService.get_user_tenants(user_id=request.user.id))


class SelectTenantView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=SelectTenantRequestSerializer,
        responses={200: TokenResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        data = _validated(SelectTenantRequestSerializer, request)
        selection = AuthService.select_tenant(user_id=request.user.id, tenant_id=data["tenant_id"])
        tenant = selection.membership.tenant
        return success(
            "Tenant selected successfully",
            {
                "token": selection.issued.token,
                "expires_at": selection.issued.expires_at.isoformat(),
                "tenant": {"id": str(tenant.id), "name": tenant.name},
                "role": selection.role,
            },
        )
