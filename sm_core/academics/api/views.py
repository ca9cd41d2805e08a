# sm_core/academics/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.permissions import IsAuthenticated

from sm_core.academics.api.serializers import (
    SchoolClassCreateSerializer,
    SchoolClassSerializer,
    SchoolClassUpdateSerializer,
    SubjectCreateSerializer,
    SubjectSerializer,
    SubjectUpdateSerializer,
)
from sm_core.academics.services import SchoolClassService, SubjectService
from sm_core.common.permissions import AcademicGate, RequireTenant
from sm_core.common.views import TenantScopedViewSet


@extend_schema_view(
    list=extend_schema(tags=["Classes"], responses=SchoolClassSerializer(many=True)),
    create=extend_schema(tags=["Classes"], request=SchoolClassCreateSerializer, responses={201: SchoolClassSerializer}),
    retrieve=extend_schema(tags=["Classes"], responses=SchoolClassSerializer),
    update=extend_schema(tags=["Classes"], request=SchoolClassUpdateSerializer, responses=SchoolClassSerializer),
    destroy=extend_schema(tags=["Classes"]),
)
class SchoolClassViewSet(TenantScopedViewSet):
    service = SchoolClassService
    serializer_class = SchoolClassSerializer
    create_serializer_class = SchoolClassCreateSerializer
    update_serializer_class = SchoolClassUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, AcademicGate]


@extend_schema_view(
    list=extend_schema(tags=["Subjects"], responses=SubjectSerializer(many=True)),
    create=extend_schema(tags=["Subjects"], request=SubjectCreateSerializer, responses={201: SubjectSerializer}),
    retrieve=extend_schema(tags=["Subjects"], responses=SubjectSerializer),
    update=extend_schema(tags=["Subjects"], request=SubjectUpdateSerializer, responses=SubjectSerializer),
    destroy=extend_schema(tags=["Subjects"]),
)
class SubjectViewSet(TenantScopedViewSet):
    service = SubjectService
    serializer_class = SubjectSerializer
    create_serializer_class = SubjectCreateSerializer
    update_serializer_class = SubjectUpdateSerializer
    permission_classes = [IsAuthenticated, RequireTenant, AcademicGate]
