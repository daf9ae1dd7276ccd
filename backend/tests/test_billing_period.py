import datetime as dt
from decimal import Decimal

import pytest

from billingdesk.services.billing_period import resolve_period
from billingdesk.services.dates import clamp_day


def test_mid_cycle_activation_end_to_end():
    p = resolve_period(dt.date(2025, 10, 12), 15)
    assert p.cycle_start == dt.date(2025, 9, 15)
    assert p.cycle_end == dt.date(2025, 10, 15)
    assert p.next_cycle_end == dt.date(2025, 11, 15)
    assert p.cycle_days == 30
    assert p.pro_days == 3
    assert p.ratio == Decimal("0.1")


def test_activation_day_before_anchor_closes_this_month():
    p = resolve_period(dt.date(2025, 3, 14), 15)
    assert p.cycle_start == dt.date(2025, 2, 15)
    assert p.cycle_end == dt.date(2025, 3, 15)
    assert p.cycle_days == 28
    assert p.pro_days == 1


def test_activation_on_anchor_rolls_to_next_month():
    """The invoice run for this month's anchor has already happened."""
    p = resolve_period(dt.date(2025, 3, 15), 15)
    assert p.cycle_start == dt.date(2025, 3, 15)
    assert p.cycle_end == dt.date(2025, 4, 15)
    assert p.next_cycle_end == dt.date(2025, 5, 15)
    assert p.cycle_days == 31
    assert p.pro_days == 31
    assert p.ratio == Decimal("1")


def test_activation_after_anchor():
    p = resolve_period(dt.date(2025, 3, 20), 15)
    assert (p.cycle_start, p.cycle_end) == (dt.date(2025, 3, 15), dt.date(2025, 4, 15))
    assert p.pro_days == 26


def test_year_boundary():
    p = resolve_period(dt.date(2025, 12, 20), 15)
    assert p.cycle_start == dt.date(2025, 12, 15)
    assert p.cycle_end == dt.date(2026, 1, 15)
    assert p.next_cycle_end == dt.date(2026, 2, 15)
    assert p.pro_days == 26


@pytest.mark.parametrize(
    "activation,cycle_start,cycle_end,cycle_days,pro_days",
    [
        (dt.date(2025, 2, 10), dt.date(2025, 1, 31), dt.date(2025, 2, 28), 28, 18),
        (dt.date(2024, 2, 10), dt.date(2024, 1, 31), dt.date(2024, 2, 29), 29, 19),
        (dt.date(2025, 2, 28), dt.date(2025, 2, 28), dt.date(2025, 3, 31), 31, 31),
        (dt.date(2025, 4, 30), dt.date(2025, 4, 30), dt.date(2025, 5, 31), 31, 31),
    ],
)
def test_anchor_31_clamps_to_month_end(activation, cycle_start, cycle_end, cycle_days, pro_days):
    p = resolve_period(activation, 31)
    assert p.cycle_start == cycle_start
    assert p.cycle_end == cycle_end
    assert p.cycle_days == cycle_days
    assert p.pro_days == pro_days


def test_first_of_month_anchor():
    p = resolve_period(dt.date(2025, 1, 10), 1)
    assert (p.cycle_start, p.cycle_end) == (dt.date(2025, 1, 1), dt.date(2025, 2, 1))
    assert p.cycle_days == 31
    assert p.pro_days == 22


def test_period_invariants_hold_for_every_day_and_anchor():
    day = dt.date(2024, 1, 1)
    while day <= dt.date(2025, 12, 31):
        for anchor in range(1, 32):
            p = resolve_period(day, anchor)
            assert 0 <= p.ratio <= 1
            assert 0 <= p.pro_days <= p.cycle_days
            assert p.cycle_start <= p.activation_date <= p.cycle_end <= p.next_cycle_end
            for boundary in (p.cycle_start, p.cycle_end, p.next_cycle_end):
                assert boundary.day == clamp_day(boundary.year, boundary.month, anchor)
        day += dt.timedelta(days=1)
