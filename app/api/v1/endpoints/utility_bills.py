"""Utility bill endpoints - meter-based bills on the shared billing cycle"""

from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core.exceptions import NotFoundError
from app.models.enums import BillKind
from app.services.utility_service import UtilityBillService
from app.services.reconciliation_service import ReconciliationService
from app.schemas.billing import (
    UtilityBillGenerate,
    UtilityBillResponse,
    ProofSubmit,
    ProofSubmitted,
    PaymentApproved,
    ReconciliationSummary,
)
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[UtilityBillResponse]])
async def list_utility_bills(
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    bills = await UtilityBillService.list_bills(db)
    return SuccessResponse(data=[UtilityBillResponse.model_validate(b) for b in bills])


@router.post(
    "/generate",
    response_model=SuccessResponse[UtilityBillResponse],
    status_code=status.HTTP_201_CREATED,
)
async def generate_utility_bill(
    bill_in: UtilityBillGenerate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Bill a meter reading. Amount is (current - previous reading) times the
    building's current tariff for the utility.
    """
    bill = await UtilityBillService.generate_bill(db, bill_in)
    return SuccessResponse(
        data=UtilityBillResponse.model_validate(bill),
        message="Utility usage recorded successfully",
    )


@router.patch("/reconcile", response_model=SuccessResponse[ReconciliationSummary])
async def reconcile_overdue_utility_bills() -> Any:
    summary = await ReconciliationService.reconcile_penalties(BillKind.UTILITY)
    return SuccessResponse(data=summary, message=summary.message)


@router.get("/{bill_id}", response_model=SuccessResponse[UtilityBillResponse])
async def get_utility_bill(
    bill_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    bill = await UtilityBillService.get_bill_by_id(db, bill_id)
    if not bill:
        raise NotFoundError("Bill not found.")
    return SuccessResponse(data=UtilityBillResponse.model_validate(bill))


@router.patch("/{bill_id}/proof", response_model=SuccessResponse[ProofSubmitted])
async def submit_utility_payment_proof(
    bill_id: UUID,
    proof_in: ProofSubmit,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    await UtilityBillService.submit_proof(db, bill_id, proof_in.proof_url)
    return SuccessResponse(
        data=ProofSubmitted(bill_id=bill_id),
        message="Utility payment proof submitted successfully.",
    )


@router.patch("/{bill_id}/approve", response_model=SuccessResponse[PaymentApproved])
async def approve_utility_payment(
    bill_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    approval = await UtilityBillService.approve_payment(db, bill_id)
    return SuccessResponse(data=approval, message="Utility payment approved successfully.")
