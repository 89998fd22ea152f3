"""
Billing-cycle arithmetic: penalty accrual and cycle rollover.

Everything here is pure and takes its "now" from the caller, so the same
functions serve interactive endpoints and the reconciliation job.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple, Union

from app.config import settings
from app.utils.time import DateLike, add_days, days_between, end_of_day, start_of_day

CENT = Decimal("0.01")


@dataclass(frozen=True)
class CycleRollover:
    """Fields written when an approved bill rolls into its next cycle."""
    bill_date: datetime
    due_date: datetime
    original_due_date: datetime
    cycle_length: int


def resolve_payment_term(payment_term: Optional[int]) -> int:
    """
    Tenant term in days, falling back to the default when unset or not
    positive. Terms above MAX_PAYMENT_TERM_DAYS are clamped to it.
    """
    try:
        term = int(payment_term)
    except (TypeError, ValueError):
        return settings.DEFAULT_PAYMENT_TERM_DAYS
    if term <= 0:
        return settings.DEFAULT_PAYMENT_TERM_DAYS
    return min(term, settings.MAX_PAYMENT_TERM_DAYS)


def initial_due_dates(
    bill_date: DateLike,
    payment_term: int,
    due_date: Optional[DateLike] = None,
    original_due_date: Optional[DateLike] = None,
) -> Tuple[datetime, datetime]:
    """
    (due_date, original_due_date) for a freshly generated bill.

    Without an explicit due date the cycle ends payment_term days after
    bill_date. Both values are snapped to 23:59:59.
    """
    if due_date is None:
        due = end_of_day(add_days(bill_date, payment_term))
        return due, due
    due = end_of_day(due_date)
    original = end_of_day(original_due_date) if original_due_date is not None else due
    return due, original


def compute_penalty(
    amount: Union[Decimal, int, float, str],
    original_due_date: DateLike,
    as_of: DateLike,
    daily_rate: Optional[Decimal] = None,
) -> Decimal:
    """
    Penalty owed on ``amount`` as of ``as_of``.

    Simple interest: daily_rate of the principal for each whole calendar day
    past the original due date. Zero on or before the due day. The result
    replaces any stored penalty; it never depends on a previous value.
    """
    rate = settings.PENALTY_DAILY_RATE if daily_rate is None else Decimal(str(daily_rate))
    days_overdue = days_between(start_of_day(original_due_date), start_of_day(as_of))
    if days_overdue <= 0:
        return Decimal("0.00")
    principal = Decimal(str(amount))
    return (principal * rate * days_overdue).quantize(CENT, rounding=ROUND_HALF_UP)


def next_cycle_length(payment_term: int, due_date: datetime, now: datetime) -> int:
    """
    Length in days of the cycle that starts when a payment is approved.

    Paying before the due moment credits the unused days to the next cycle.
    Paying at or after it shortens the next cycle by the days late, down to
    zero.
    """
    if now < due_date:
        return payment_term + days_between(now, due_date)
    overdue_days = days_between(due_date, now)
    return max(0, payment_term - overdue_days)


def roll_cycle(payment_term: int, due_date: datetime, now: datetime) -> CycleRollover:
    cycle_length = next_cycle_length(payment_term, due_date, now)
    new_due = end_of_day(add_days(now, cycle_length))
    return CycleRollover(
        bill_date=start_of_day(now),
        due_date=new_due,
        original_due_date=new_due,
        cycle_length=cycle_length,
    )
