from __future__ import annotations

import calendar
import datetime as dt


def normalize_utc(value: dt.date | dt.datetime) -> dt.date:
    """Truncate to a UTC calendar date. Naive datetimes are taken as UTC."""
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return dt.date(value.year, value.month, value.day)
    return dt.date(value.year, value.month, value.day)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    return max(1, min(day, days_in_month(year, month)))


def anchor_date(year: int, month: int, anchor_day: int) -> dt.date:
    """Anchor day of the given month, clamped to the month's last day (31 in Feb -> 28/29)."""
    return dt.date(year, month, clamp_day(year, month, anchor_day))


def add_months(d: dt.date, months: int, keep_day: int | None = None) -> dt.date:
    """
    Add (possibly negative) months, re-clamping the day in the target month.

    keep_day replaces d.day as the day to clamp, so an anchor of 31 survives
    passing through February: 2025-02-28 + 1 month (keep_day=31) -> 2025-03-31.
    """
    day = d.day if keep_day is None else keep_day
    y = d.year + (d.month - 1 + months) // 12
    m = (d.month - 1 + months) % 12 + 1
    return dt.date(y, m, clamp_day(y, m, day))


def days_between(a: dt.date, b: dt.date) -> int:
    return (b - a).days
