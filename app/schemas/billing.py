from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from uuid import UUID
from datetime import datetime
from decimal import Decimal

from app.models.base import PROOF_URL_MAX_LENGTH
from app.models.enums import PaymentStatus, UtilityType, BillKind


class BillGenerate(BaseModel):
    """
    Generate request. Required fields are checked by the service so that
    a missing one is reported as INVALID_INPUT rather than a schema error.
    """
    subject_id: Optional[UUID] = None
    bill_date: Optional[datetime] = None
    amount: Optional[Decimal] = None
    due_date: Optional[datetime] = None
    original_due_date: Optional[datetime] = None


class UtilityBillGenerate(BaseModel):
    subject_id: Optional[UUID] = None
    utility_type: Optional[UtilityType] = None
    current_reading: Optional[Decimal] = None
    bill_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    original_due_date: Optional[datetime] = None


class ProofSubmit(BaseModel):
    proof_url: Optional[str] = Field(None, max_length=PROOF_URL_MAX_LENGTH)


class BillResponse(BaseModel):
    id: UUID
    subject_id: UUID
    bill_date: datetime
    due_date: datetime
    original_due_date: datetime
    amount: Decimal
    penalty: Decimal
    payment_term: int
    payment_status: PaymentStatus
    payment_proof_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UtilityBillResponse(BillResponse):
    utility_type: UtilityType
    previous_reading: Decimal
    current_reading: Decimal
    rate: Decimal


class ProofSubmitted(BaseModel):
    bill_id: UUID


class PaymentApproved(BaseModel):
    bill_id: UUID
    new_bill_date: datetime
    new_due_date: datetime
    cycle_length: int


class ReconciliationSummary(BaseModel):
    """Outcome of one penalty reconciliation pass over a bill table."""
    bill_kind: BillKind
    total: int = Field(0, ge=0, description="Unpaid bills found")
    updated: int = Field(0, ge=0, description="Penalties written")
    failed: List[UUID] = Field(default_factory=list, description="Bills whose update failed")

    @property
    def message(self) -> str:
        if self.total == 0:
            return "No unpaid bills found."
        if self.failed:
            return (
                f"Penalties updated for {self.updated} of {self.total} unpaid bills; "
                f"{len(self.failed)} failed."
            )
        return "Overdue bills updated with continuous penalty accrual."
