# sm_core/fees/services.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from sm_core.common.api.exceptions import InvalidInput
from sm_core.common.services import TenantCrudService
from sm_core.fees.models import FeeStatus
from sm_core.fees.selectors import fee_types, student_fees
from sm_core.students.selectors import students


class FeeTypeService(TenantCrudService):
    repository = fee_types
    entity = "fee type"
    unique_fields = (("name", "fee type name already exists"),)


class StudentFeeService(TenantCrudService):
    """
    Charges against a student. amount defaults to the fee type's
    default_amount; a paid fee must carry a payment_date.
    """

    repository = student_fees
    entity = "student fee"
    references = (
        ("student_id", students, "student not found"),
        ("fee_type_id", fee_types, "fee type not found"),
    )

    @classmethod
    def validate_create(cls, *, tenant_id: UUID, data: dict[str, Any]) -> None:
        if data.get("amount") is None:
            data["amount"] = fee_types.get_by_id(tenant_id, data["fee_type_id"]).default_amount
        cls._check_payment(status=data.get("status", FeeStatus.UNPAID), payment_date=data.get("payment_date"))

    @classmethod
    def validate_update(cls, *, tenant_id: UUID, obj, data: dict[str, Any]) -> None:
        cls._check_payment(
            status=data.get("status", obj.status),
            payment_date=data.get("payment_date", obj.payment_date),
        )

    @staticmethod
    def _check_payment(*, status: str, payment_date) -> None:
        if status == FeeStatus.PAID and payment_date is None:
            raise InvalidInput("payment_date is required when status is paid")
