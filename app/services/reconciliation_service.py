"""Penalty Reconciliation - recomputes penalties on every unpaid bill"""

import asyncio
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.logging import get_logger
from app.database import session_scope
from app.models.billing import RentBill, UtilityBill
from app.models.enums import BillKind, PaymentStatus
from app.schemas.billing import ReconciliationSummary
from app.services.billing_cycle import compute_penalty
from app.utils.time import get_utc_now, start_of_day

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager]

BILL_MODELS: Dict[BillKind, Any] = {
    BillKind.RENT: RentBill,
    BillKind.UTILITY: UtilityBill,
}


class ReconciliationService:
    """
    Only ever writes ``penalty``. Interactive endpoints never write that
    column after creation, so the job can run alongside live traffic.
    """

    @staticmethod
    async def find_unpaid_bills(db: AsyncSession, model: Any) -> List[Any]:
        result = await db.execute(
            select(model.id, model.amount, model.due_date, model.original_due_date)
            .where(model.payment_status != PaymentStatus.PAID)
        )
        return list(result.all())

    @staticmethod
    async def reconcile_penalties(
        kind: BillKind,
        session_factory: SessionFactory = session_scope,
        as_of: Optional[datetime] = None,
    ) -> ReconciliationSummary:
        """
        Overwrite the penalty of every unpaid bill of ``kind``.

        Updates run concurrently, each in its own session, bounded by
        RECONCILE_CONCURRENCY. A failed row is logged and reported; it does
        not stop the others. Re-running with the same ``as_of`` is a no-op.
        """
        model = BILL_MODELS[kind]
        as_of = start_of_day(as_of or get_utc_now())

        async with session_factory() as db:
            bills = await ReconciliationService.find_unpaid_bills(db, model)

        if not bills:
            logger.info("No unpaid bills found", extra={"bill_kind": kind.value})
            return ReconciliationSummary(bill_kind=kind)

        semaphore = asyncio.Semaphore(max(1, settings.RECONCILE_CONCURRENCY))

        async def apply(bill) -> None:
            penalty = compute_penalty(bill.amount, bill.original_due_date or bill.due_date, as_of)
            async with semaphore:
                async with session_factory() as session:
                    await session.execute(
                        update(model)
                        .where(model.id == bill.id)
                        .values(penalty=penalty)
                        .execution_options(synchronize_session=False)
                    )

        outcomes = await asyncio.gather(*(apply(bill) for bill in bills), return_exceptions=True)

        failed = []
        for bill, outcome in zip(bills, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Penalty update failed",
                    extra={"bill_kind": kind.value, "bill_id": str(bill.id)},
                    exc_info=outcome,
                )
                failed.append(bill.id)

        summary = ReconciliationSummary(
            bill_kind=kind,
            total=len(bills),
            updated=len(bills) - len(failed),
            failed=failed,
        )
        logger.info(
            summary.message,
            extra={
                "bill_kind": kind.value,
                "total": summary.total,
                "updated": summary.updated,
                "failed": len(failed),
                "as_of": as_of.date().isoformat(),
            },
        )
        return summary

    @staticmethod
    async def reconcile_all(
        session_factory: SessionFactory = session_scope,
        as_of: Optional[datetime] = None,
    ) -> List[ReconciliationSummary]:
        summaries = []
        for kind in BILL_MODELS:
            summaries.append(
                await ReconciliationService.reconcile_penalties(kind, session_factory, as_of)
            )
        return summaries
