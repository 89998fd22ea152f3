"""Unit tests for penalty accrual and cycle rollover (pure logic, no DB)."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from app.config import settings
from app.services.billing_cycle import (
    compute_penalty,
    initial_due_dates,
    next_cycle_length,
    resolve_payment_term,
    roll_cycle,
)

DUE = datetime(2024, 1, 31, 23, 59, 59)


# ---------------------------------------------------------------------------
# compute_penalty
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("as_of", [
    datetime(2024, 1, 1),
    datetime(2024, 1, 30, 12, 0),
    datetime(2024, 1, 31, 0, 0),
    datetime(2024, 1, 31, 23, 59, 59),
])
def test_no_penalty_on_or_before_due_day(as_of):
    assert compute_penalty(Decimal("1000"), DUE, as_of) == Decimal("0")


@pytest.mark.parametrize("days", [1, 2, 10, 45])
def test_penalty_grows_linearly_per_overdue_day(days):
    as_of = DUE + timedelta(days=days)
    assert compute_penalty(Decimal("1000"), DUE, as_of) == Decimal("1000") * Decimal("0.01") * days


def test_penalty_counts_calendar_days_not_hours():
    # One minute past midnight after the due day is already one full day late
    assert compute_penalty(Decimal("500"), DUE, datetime(2024, 2, 1, 0, 1)) == Decimal("5.00")


def test_penalty_is_idempotent():
    as_of = datetime(2024, 2, 10)
    first = compute_penalty(Decimal("1234.56"), DUE, as_of)
    second = compute_penalty(Decimal("1234.56"), DUE, as_of)
    assert first == second == Decimal("123.46")


def test_penalty_accepts_plain_numbers_and_custom_rate():
    assert compute_penalty(200, date(2024, 1, 31), date(2024, 2, 3), daily_rate=Decimal("0.05")) == Decimal("30.00")


def test_penalty_uses_configured_rate_by_default():
    as_of = DUE + timedelta(days=3)
    expected = (Decimal("100") * settings.PENALTY_DAILY_RATE * 3).quantize(Decimal("0.01"))
    assert compute_penalty(Decimal("100"), DUE, as_of) == expected


# ---------------------------------------------------------------------------
# payment term and first cycle
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("term, expected", [
    (30, 30),
    (7, 7),
    ("14", 14),
    (None, 30),
    (0, 30),
    (-5, 30),
    ("abc", 30),
    (3650, 3650),
    (10**9, 3650),
])
def test_resolve_payment_term(term, expected):
    assert resolve_payment_term(term) == expected


def test_oversized_term_still_yields_a_due_date():
    due, _ = initial_due_dates(date(2024, 1, 1), resolve_payment_term(10**9))
    assert due == datetime(2033, 12, 29, 23, 59, 59)


def test_initial_due_dates_from_term():
    due, original = initial_due_dates(date(2024, 1, 1), 30)
    assert due == original == datetime(2024, 1, 31, 23, 59, 59)


def test_initial_due_dates_snaps_explicit_due_date_to_end_of_day():
    due, original = initial_due_dates(date(2024, 1, 1), 30, due_date=datetime(2024, 1, 10, 9, 30))
    assert due == datetime(2024, 1, 10, 23, 59, 59)
    assert original == due


def test_initial_due_dates_keeps_separate_original():
    due, original = initial_due_dates(
        date(2024, 1, 1), 30,
        due_date=date(2024, 1, 10),
        original_due_date=date(2024, 1, 5),
    )
    assert due == datetime(2024, 1, 10, 23, 59, 59)
    assert original == datetime(2024, 1, 5, 23, 59, 59)


# ---------------------------------------------------------------------------
# next cycle on approval
# ---------------------------------------------------------------------------

def test_early_payment_extends_next_cycle():
    now = DUE - timedelta(days=5)
    assert next_cycle_length(30, DUE, now) == 35


def test_late_payment_shrinks_next_cycle():
    now = DUE + timedelta(days=10)
    assert next_cycle_length(30, DUE, now) == 20


def test_very_late_payment_floors_at_zero():
    now = DUE + timedelta(days=25)
    assert next_cycle_length(10, DUE, now) == 0


def test_payment_at_due_moment_takes_late_branch_with_zero_days():
    assert next_cycle_length(30, DUE, DUE) == 30


def test_payment_earlier_on_due_day_is_early_with_no_credit():
    assert next_cycle_length(30, DUE, datetime(2024, 1, 31, 9, 0)) == 30


def test_roll_cycle_zero_length_is_due_end_of_today():
    now = DUE + timedelta(days=25, hours=3)
    rollover = roll_cycle(10, DUE, now)
    assert rollover.cycle_length == 0
    assert rollover.due_date == datetime(now.year, now.month, now.day, 23, 59, 59)
    assert rollover.original_due_date == rollover.due_date


def test_roll_cycle_early_payment_scenario():
    """Bill due 2024-01-31, approved 2024-01-20: 11 unused days credited."""
    rollover = roll_cycle(30, DUE, datetime(2024, 1, 20, 14, 30))
    assert rollover.cycle_length == 41
    assert rollover.bill_date == datetime(2024, 1, 20)
    assert rollover.due_date == datetime(2024, 3, 1, 23, 59, 59)
    assert rollover.original_due_date == rollover.due_date
