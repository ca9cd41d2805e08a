# sm_core/iam/api/users.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.permissions import IsAuthenticated

from sm_core.common.permissions import RequireTenant, UserManagementGate
from sm_core.common.views import TenantScopedViewSet
from sm_core.iam.api.serializers import MemberCreateSerializer, MemberSerializer, MemberUpdateSerializer
from sm_core.iam.services.users import UserService


@extend_schema_view(
    list=extend_schema(tags=["Users"], responses=MemberSerializer(many=True)),
    create=extend_schema(tags=["Users"], request=MemberCreateSerializer, responses={201: MemberSerializer}),
    retrieve=extend_schema(tags=["Users"], responses=MemberSerializer),
    update=extend_schema(tags=["Users"], request=MemberUpdateSerializer, responses=MemberSerializer),
    destroy=extend_schema(tags=["Users"]),
)
class UserViewSet(TenantScopedViewSet):
    service = UserService
    serializer_class = MemberSerializer
    create_serializer_class = MemberCreateSerializer
    update_serializer_class = MemberUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, UserManagementGate]
