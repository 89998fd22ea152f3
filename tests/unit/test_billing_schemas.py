"""Unit tests for billing, tenant and tariff schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.models.enums import BillKind, PaymentStatus, UtilityType
from app.schemas.billing import (
    BillGenerate,
    BillResponse,
    ProofSubmit,
    ReconciliationSummary,
    UtilityBillResponse,
)
from app.schemas.tenant import TenantCreate
from app.schemas.utility import UtilityRateCreate


def test_bill_generate_accepts_plain_dates():
    body = BillGenerate(subject_id=uuid4(), bill_date="2024-01-01", amount="1000.50")
    assert body.bill_date == datetime(2024, 1, 1)
    assert body.amount == Decimal("1000.50")
    assert body.due_date is None


def test_bill_response_from_orm_like_object():
    bill_id = uuid4()

    class FakeBill:
        id = bill_id
        subject_id = uuid4()
        bill_date = datetime(2024, 1, 1)
        due_date = datetime(2024, 1, 31, 23, 59, 59)
        original_due_date = datetime(2024, 1, 31, 23, 59, 59)
        amount = Decimal("1000.00")
        penalty = Decimal("20.00")
        payment_term = 30
        payment_status = PaymentStatus.SUBMITTED
        payment_proof_url = "https://files.example.com/p.png"
        created_at = datetime(2024, 1, 1)
        updated_at = datetime(2024, 1, 2)

    response = BillResponse.model_validate(FakeBill())
    assert response.id == bill_id
    assert response.payment_status == PaymentStatus.SUBMITTED
    assert response.penalty == Decimal("20.00")


def test_utility_bill_response_requires_meter_fields():
    with pytest.raises(ValidationError):
        UtilityBillResponse(
            id=uuid4(),
            subject_id=uuid4(),
            bill_date=datetime(2024, 1, 1),
            due_date=datetime(2024, 1, 31, 23, 59, 59),
            original_due_date=datetime(2024, 1, 31, 23, 59, 59),
            amount=Decimal("10"),
            penalty=Decimal("0"),
            payment_term=30,
            payment_status=PaymentStatus.PENDING,
            created_at=datetime(2024, 1, 1),
            updated_at=datetime(2024, 1, 1),
            utility_type=UtilityType.WATER,
        )


@pytest.mark.parametrize("field", ["electricity_rate", "water_rate", "generator_rate"])
def test_utility_rates_must_be_positive(field):
    rates = {
        "building_id": uuid4(),
        "electricity_rate": "2.5",
        "water_rate": "10",
        "generator_rate": "4",
    }
    rates[field] = "0"
    with pytest.raises(ValidationError):
        UtilityRateCreate(**rates)


def test_tenant_create_defaults():
    tenant = TenantCreate(full_name="Hana")
    assert tenant.payment_term is None
    assert tenant.pays_electricity is False
    assert tenant.initial_water_reading == Decimal("0")


def test_tenant_create_rejects_blank_name():
    with pytest.raises(ValidationError):
        TenantCreate(full_name="")


def test_reconciliation_summary_messages():
    assert ReconciliationSummary(bill_kind=BillKind.RENT).message == "No unpaid bills found."
    assert (
        ReconciliationSummary(bill_kind=BillKind.RENT, total=2, updated=2).message
        == "Overdue bills updated with continuous penalty accrual."
    )
    partial = ReconciliationSummary(bill_kind=BillKind.UTILITY, total=3, updated=2, failed=[uuid4()])
    assert partial.message == "Penalties updated for 2 of 3 unpaid bills; 1 failed."


def test_tenant_create_rejects_oversized_term():
    with pytest.raises(ValidationError):
        TenantCreate(full_name="Hana", payment_term=10**9)
    assert TenantCreate(full_name="Hana", payment_term=365).payment_term == 365


def test_proof_url_length_matches_column():
    ProofSubmit(proof_url="https://files.example.com/" + "a" * 900)
    with pytest.raises(ValidationError):
        ProofSubmit(proof_url="https://files.example.com/" + "a" * 2000)
