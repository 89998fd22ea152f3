"""Bill Service - billing-cycle state machine shared by rent and utility bills"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.core.logging import get_logger
from app.models.base import PROOF_URL_MAX_LENGTH
from app.models.billing import RentBill
from app.models.enums import BillKind, PaymentStatus
from app.models.tenant import Tenant
from app.schemas.billing import BillGenerate, PaymentApproved
from app.services.billing_cycle import initial_due_dates, resolve_payment_term, roll_cycle
from app.services.tenant_service import TenantService
from app.utils.time import DateLike, get_utc_now, start_of_day

logger = get_logger(__name__)


class BillingCycleService:
    """
    pending -> submitted -> paid, where paid rolls the same row into the next
    cycle. Subclasses bind ``model`` to a table carrying BillingCycleMixin.
    """

    model: Any = None
    kind: BillKind

    @classmethod
    async def list_bills(cls, db: AsyncSession) -> List[Any]:
        result = await db.execute(
            select(cls.model).order_by(cls.model.created_at.desc())
        )
        return list(result.scalars().all())

    @classmethod
    async def get_bill_by_id(cls, db: AsyncSession, bill_id: UUID) -> Optional[Any]:
        result = await db.execute(
            select(cls.model).where(cls.model.id == bill_id)
        )
        return result.scalar_one_or_none()

    @classmethod
    async def _require_bill(cls, db: AsyncSession, bill_id: UUID) -> Any:
        bill = await cls.get_bill_by_id(db, bill_id)
        if not bill:
            raise NotFoundError("Bill not found.")
        return bill

    @staticmethod
    async def _require_tenant(db: AsyncSession, subject_id: UUID) -> Tenant:
        tenant = await TenantService.get_tenant_by_id(db, subject_id)
        if not tenant:
            raise NotFoundError("Tenant not found.")
        return tenant

    @staticmethod
    def _open_cycle(
        tenant: Tenant,
        bill_date: DateLike,
        due_date: Optional[DateLike] = None,
        original_due_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        """Column values of a new bill in its first, pending cycle."""
        payment_term = resolve_payment_term(tenant.payment_term)
        due, original = initial_due_dates(bill_date, payment_term, due_date, original_due_date)
        return {
            "subject_id": tenant.id,
            "bill_date": start_of_day(bill_date),
            "due_date": due,
            "original_due_date": original,
            "payment_term": payment_term,
            "penalty": Decimal("0.00"),
            "payment_status": PaymentStatus.PENDING,
        }

    @classmethod
    async def _insert(cls, db: AsyncSession, fields: Dict[str, Any]) -> Any:
        bill = cls.model(**fields)
        db.add(bill)
        await db.commit()
        await db.refresh(bill)
        logger.info(
            "Bill generated",
            extra={
                "bill_kind": cls.kind.value,
                "bill_id": str(bill.id),
                "subject_id": str(bill.subject_id),
                "due_date": bill.due_date.isoformat(),
            },
        )
        return bill

    @classmethod
    async def submit_proof(cls, db: AsyncSession, bill_id: UUID, proof_url: Optional[str]) -> UUID:
        """
        Attach a payment proof and force the bill to submitted.

        Allowed from any status, so a paid bill can receive the proof for its
        next cycle. The write is keyed on the status that was read; a
        concurrent change in between is reported as a conflict.
        """
        if not proof_url or not proof_url.strip():
            raise InvalidInputError("Proof URL is required for submission.")
        proof_url = proof_url.strip()
        if len(proof_url) > PROOF_URL_MAX_LENGTH:
            raise InvalidInputError(
                f"Proof URL must be at most {PROOF_URL_MAX_LENGTH} characters."
            )

        bill = await cls._require_bill(db, bill_id)
        observed_status = bill.payment_status

        result = await db.execute(
            update(cls.model)
            .where(
                cls.model.id == bill_id,
                cls.model.payment_status == observed_status,
            )
            .values(
                payment_proof_url=proof_url,
                payment_status=PaymentStatus.SUBMITTED,
                updated_at=get_utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError("Bill status changed while submitting proof. Re-fetch and retry.")
        await db.commit()

        logger.info(
            "Payment proof submitted",
            extra={
                "bill_kind": cls.kind.value,
                "bill_id": str(bill_id),
                "previous_status": observed_status.value,
            },
        )
        return bill_id

    @classmethod
    async def approve_payment(
        cls,
        db: AsyncSession,
        bill_id: UUID,
        now: Optional[datetime] = None,
    ) -> PaymentApproved:
        """
        Mark a submitted bill paid and roll it into its next cycle.

        Early payment lengthens the next cycle by the unused days; late
        payment shortens it by the days late (never below zero). bill_date,
        due_date, original_due_date and the paid status go out in a single
        update guarded on payment_status = submitted.
        """
        now = now or get_utc_now()
        bill = await cls._require_bill(db, bill_id)
        if bill.payment_status != PaymentStatus.SUBMITTED:
            raise ConflictError("Bill not found or payment hasn't been submitted.")

        rollover = roll_cycle(resolve_payment_term(bill.payment_term), bill.due_date, now)

        result = await db.execute(
            update(cls.model)
            .where(
                cls.model.id == bill_id,
                cls.model.payment_status == PaymentStatus.SUBMITTED,
            )
            .values(
                bill_date=rollover.bill_date,
                due_date=rollover.due_date,
                original_due_date=rollover.original_due_date,
                payment_status=PaymentStatus.PAID,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError("Bill not found or payment hasn't been submitted.")
        await db.commit()

        logger.info(
            "Payment approved",
            extra={
                "bill_kind": cls.kind.value,
                "bill_id": str(bill_id),
                "cycle_length": rollover.cycle_length,
                "new_due_date": rollover.due_date.isoformat(),
            },
        )
        return PaymentApproved(
            bill_id=bill_id,
            new_bill_date=rollover.bill_date,
            new_due_date=rollover.due_date,
            cycle_length=rollover.cycle_length,
        )


class RentBillService(BillingCycleService):
    model = RentBill
    kind = BillKind.RENT

    @classmethod
    async def generate_bill(cls, db: AsyncSession, data: BillGenerate) -> RentBill:
        missing = [
            name for name in ("subject_id", "bill_date", "amount")
            if getattr(data, name) is None
        ]
        if missing:
            raise InvalidInputError(f"Missing required fields: {', '.join(missing)}.")
        if data.amount <= 0:
            raise InvalidInputError("Amount must be greater than zero.")

        tenant = await cls._require_tenant(db, data.subject_id)
        fields = cls._open_cycle(tenant, data.bill_date, data.due_date, data.original_due_date)
        fields["amount"] = data.amount
        return await cls._insert(db, fields)
