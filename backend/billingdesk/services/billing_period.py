from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal

from billingdesk.services.dates import add_months, anchor_date, days_between, normalize_utc


@dataclass(frozen=True)
class BillingPeriod:
    activation_date: dt.date
    cycle_start: dt.date
    cycle_end: dt.date  # first regular invoice date
    next_cycle_end: dt.date
    cycle_days: int
    pro_days: int
    ratio: Decimal  # pro_days / cycle_days, 0 when cycle_days == 0


def first_anchor_after_activation(activation: dt.date, anchor_day: int) -> dt.date:
    """
    Anchor date that closes the cycle the activation falls in.

    Activating on or after this month's (clamped) anchor misses this month's
    invoice run, so the cycle closes on next month's anchor.
    """
    this_anchor = anchor_date(activation.year, activation.month, anchor_day)
    if activation.day >= this_anchor.day:
        return add_months(this_anchor, 1, anchor_day)
    return this_anchor


def resolve_period(activation: dt.date | dt.datetime, anchor_day: int) -> BillingPeriod:
    """
    Resolve the billing cycle enclosing an activation.

    anchor_day is expected to be validated (1..31) by the caller.
    """
    act = normalize_utc(activation)
    cycle_end = first_anchor_after_activation(act, anchor_day)
    cycle_start = add_months(cycle_end, -1, anchor_day)

    cycle_days = max(0, days_between(cycle_start, cycle_end))
    pro_days = max(0, min(cycle_days, days_between(act, cycle_end)))
    ratio = Decimal(0) if cycle_days == 0 else Decimal(pro_days) / Decimal(cycle_days)

    return BillingPeriod(
        activation_date=act,
        cycle_start=cycle_start,
        cycle_end=cycle_end,
        next_cycle_end=add_months(cycle_end, 1, anchor_day),
        cycle_days=cycle_days,
        pro_days=pro_days,
        ratio=ratio,
    )
