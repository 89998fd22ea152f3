"""Rent bill endpoints - generation, proof submission, approval, penalties"""

from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core.exceptions import NotFoundError
from app.models.enums import BillKind
from app.services.bill_service import RentBillService
from app.services.reconciliation_service import ReconciliationService
from app.schemas.billing import (
    BillGenerate,
    BillResponse,
    ProofSubmit,
    ProofSubmitted,
    PaymentApproved,
    ReconciliationSummary,
)
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[BillResponse]])
async def list_bills(
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """All rent bills, newest first."""
    bills = await RentBillService.list_bills(db)
    return SuccessResponse(data=[BillResponse.model_validate(b) for b in bills])


@router.post(
    "/generate",
    response_model=SuccessResponse[BillResponse],
    status_code=status.HTTP_201_CREATED,
)
async def generate_bill(
    bill_in: BillGenerate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Open a rent bill for a tenant. Without due_date the cycle ends
    payment_term days after bill_date.
    """
    bill = await RentBillService.generate_bill(db, bill_in)
    return SuccessResponse(
        data=BillResponse.model_validate(bill),
        message="Bill generated successfully",
    )


@router.patch("/reconcile", response_model=SuccessResponse[ReconciliationSummary])
async def reconcile_overdue_bills() -> Any:
    """Recompute penalties on every unpaid rent bill."""
    summary = await ReconciliationService.reconcile_penalties(BillKind.RENT)
    return SuccessResponse(data=summary, message=summary.message)


@router.get("/{bill_id}", response_model=SuccessResponse[BillResponse])
async def get_bill(
    bill_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    bill = await RentBillService.get_bill_by_id(db, bill_id)
    if not bill:
        raise NotFoundError("Bill not found.")
    return SuccessResponse(data=BillResponse.model_validate(bill))


@router.patch("/{bill_id}/proof", response_model=SuccessResponse[ProofSubmitted])
async def submit_payment_proof(
    bill_id: UUID,
    proof_in: ProofSubmit,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Attach a payment proof URL; the bill moves to submitted."""
    await RentBillService.submit_proof(db, bill_id, proof_in.proof_url)
    return SuccessResponse(
        data=ProofSubmitted(bill_id=bill_id),
        message="Payment proof submitted successfully.",
    )


@router.patch("/{bill_id}/approve", response_model=SuccessResponse[PaymentApproved])
async def approve_payment(
    bill_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Approve a submitted payment and start the bill's next cycle."""
    approval = await RentBillService.approve_payment(db, bill_id)
    return SuccessResponse(data=approval, message="Payment approved successfully.")
