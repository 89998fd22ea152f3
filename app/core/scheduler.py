"""Background scheduler for the daily penalty reconciliation"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import settings
from app.core.logging import get_logger
from app.services.reconciliation_service import ReconciliationService

logger = get_logger(__name__)

RECONCILE_JOB_ID = "daily_penalty_reconciliation"


async def run_penalty_reconciliation() -> None:
    """Scheduled entry point: reconcile rent and utility bills."""
    logger.info("Penalty reconciliation started")
    summaries = await ReconciliationService.reconcile_all()
    for summary in summaries:
        logger.info(
            "Penalty reconciliation finished",
            extra={
                "bill_kind": summary.bill_kind.value,
                "total": summary.total,
                "updated": summary.updated,
                "failed": [str(bill_id) for bill_id in summary.failed],
            },
        )


def create_scheduler() -> AsyncIOScheduler:
    """
    Build (but do not start) the scheduler. Must be started from inside a
    running event loop, i.e. the application lifespan.
    """
    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        run_penalty_reconciliation,
        trigger=CronTrigger(
            hour=settings.RECONCILE_CRON_HOUR,
            minute=settings.RECONCILE_CRON_MINUTE,
            timezone="UTC",
        ),
        id=RECONCILE_JOB_ID,
        name="Recompute penalties on unpaid rent and utility bills",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    return scheduler
