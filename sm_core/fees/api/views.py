# sm_core/fees/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.permissions import IsAuthenticated

from sm_core.common.permissions import FinanceGate, RequireTenant
from sm_core.common.views import TenantScopedViewSet
from sm_core.fees.api.serializers import (
    FeeTypeCreateSerializer,
    FeeTypeSerializer,
    FeeTypeUpdateSerializer,
    StudentFeeCreateSerializer,
    StudentFeeSerializer,
    StudentFeeUpdateSerializer,
)
from sm_core.fees.services import FeeTypeService, StudentFeeService


@extend_schema_view(
    list=extend_schema(tags=["Fees"], responses=StudentFeeSerializer(many=True)),
    create=extend_schema(tags=["Fees"], request=StudentFeeCreateSerializer, responses={201: StudentFeeSerializer}),
    retrieve=extend_schema(tags=["Fees"], responses=StudentFeeSerializer),
    update=extend_schema(tags=["Fees"], request=StudentFeeUpdateSerializer, responses=StudentFeeSerializer),
    destroy=extend_schema(tags=["Fees"]),
)
class StudentFeeViewSet(TenantScopedViewSet):
    service = StudentFeeService
    serializer_class = StudentFeeSerializer
    create_serializer_class = StudentFeeCreateSerializer
    update_serializer_class = StudentFeeUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, FinanceGate]


@extend_schema_view(
    list=extend_schema(tags=["Fee types"], responses=FeeTypeSerializer(many=True)),
    create=extend_schema(tags=["Fee types"], request=FeeTypeCreateSerializer, responses={201: FeeTypeSerializer}),
    retrieve=extend_schema(tags=["Fee types"], responses=FeeTypeSerializer),
    update=extend_schema(tags=["Fee types"], request=FeeTypeUpdateSerializer, responses=FeeTypeSerializer),
    destroy=extend_schema(tags=["Fee types"]),
)
class FeeTypeViewSet(TenantScopedViewSet):
    service = FeeTypeService
    serializer_class = FeeTypeSerializer
    create_serializer_class = FeeTypeCreateSerializer
    update_serializer_class = FeeTypeUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, FinanceGate]
