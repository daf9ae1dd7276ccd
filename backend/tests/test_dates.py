import datetime as dt

from billingdesk.services.dates import add_months, anchor_date, clamp_day, days_between, days_in_month, normalize_utc


def test_days_in_month_handles_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2025, 2) == 28
    assert days_in_month(2025, 4) == 30
    assert days_in_month(2025, 12) == 31


def test_clamp_day_stays_inside_month():
    assert clamp_day(2025, 2, 31) == 28
    assert clamp_day(2024, 2, 31) == 29
    assert clamp_day(2025, 2, 0) == 1
    assert clamp_day(2025, 3, 15) == 15


def test_anchor_date_clamped_to_month_end():
    assert anchor_date(2025, 2, 31) == dt.date(2025, 2, 28)
    assert anchor_date(2025, 4, 31) == dt.date(2025, 4, 30)
    assert anchor_date(2025, 5, 1) == dt.date(2025, 5, 1)


def test_add_months_reclamps_day():
    assert add_months(dt.date(2025, 1, 31), 1) == dt.date(2025, 2, 28)
    assert add_months(dt.date(2025, 1, 15), -1) == dt.date(2024, 12, 15)
    assert add_months(dt.date(2024, 11, 30), 14) == dt.date(2026, 1, 30)
    assert add_months(dt.date(2025, 3, 31), -13) == dt.date(2024, 2, 29)


def test_add_months_keep_day_restores_anchor_after_short_month():
    """Anchor 31 passing through February lands back on the 31st."""
    assert add_months(dt.date(2025, 2, 28), 1, keep_day=31) == dt.date(2025, 3, 31)
    assert add_months(dt.date(2025, 2, 28), 1) == dt.date(2025, 3, 28)


def test_days_between_is_signed_whole_days():
    assert days_between(dt.date(2025, 3, 1), dt.date(2025, 3, 31)) == 30
    assert days_between(dt.date(2025, 3, 31), dt.date(2025, 3, 1)) == -30
    assert days_between(dt.date(2024, 12, 31), dt.date(2025, 1, 1)) == 1


def test_normalize_utc_converts_aware_datetimes():
    amman = dt.timezone(dt.timedelta(hours=3))
    assert normalize_utc(dt.datetime(2025, 3, 16, 1, 30, tzinfo=amman)) == dt.date(2025, 3, 15)
    assert normalize_utc(dt.datetime(2025, 3, 15, 23, 59)) == dt.date(2025, 3, 15)
    assert normalize_utc(dt.date(2025, 3, 15)) == dt.date(2025, 3, 15)
