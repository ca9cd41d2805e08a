# sm_core/fees/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from sm_core.fees.models import FeeStatus, FeeType, StudentFee

MONEY = {"max_digits": 12, "decimal_places": 2, "min_value": Decimal("0")}


class FeeTypeCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    default_amount = serializers.DecimalField(required=False, default=Decimal("0"), **MONEY)
    is_mandatory = serializers.BooleanField(required=False, default=False)
    is_active = serializers.BooleanField(required=False, default=True)


class FeeTypeUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    default_amount = serializers.DecimalField(required=False, **MONEY)
    is_mandatory = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)


class FeeTypeSerializer(serializers.ModelSerializer):
    default_amount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True)

    class Meta:
        model = FeeType
        fields = [
            "id",
            "tenant_id",
            "name",
            "description",
            "default_amount",
            "is_mandatory",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StudentFeeCreateSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    fee_type_id = serializers.UUIDField()
    amount = serializers.DecimalField(required=False, allow_null=True, **MONEY)
    due_date = serializers.DateField()
    status = serializers.ChoiceField(choices=FeeStatus.choices, required=False, default=FeeStatus.UNPAID)
    payment_date = serializers.DateField(required=False, allow_null=True)
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class StudentFeeUpdateSerializer(serializers.Serializer):
    fee_type_id = serializers.UUIDField(required=False)
    amount = serializers.DecimalField(required=False, **MONEY)
    due_date = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=FeeStatus.choices, required=False)
    payment_date = serializers.DateField(required=False, allow_null=True)
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class StudentFeeSerializer(serializers.ModelSerializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True)
    fee_type_name = serializers.CharField(source="fee_type.name", read_only=True)

    class Meta:
        model = StudentFee
        fields = [
            "id",
            "tenant_id",
            "student_id",
            "fee_type_id",
            "fee_type_name",
            "amount",
            "due_date",
            "status",
            "payment_date",
            "payment_method",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
