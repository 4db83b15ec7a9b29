from datetime import date, datetime, timedelta

from reldate.core.calendar import (
    RELATIONSHIPS,
    day_delta,
    evaluate_all,
    is_last_month,
    is_last_week,
    is_last_year,
    is_next_month,
    is_next_week,
    is_next_year,
    is_this_month,
    is_this_week,
    is_this_year,
    is_today,
    is_tomorrow,
    is_yesterday,
    shift_date,
    week_of_year,
)


def test_same_instant_only_open_relationships_hold(reference):
    result = evaluate_all(reference, reference)

    assert list(result) == list(RELATIONSHIPS)
    assert {name for name, hit in result.items() if hit} == {"today", "this-week", "this-month", "this-year"}


def test_shift_date_normalizes_overflow():
    assert shift_date(date(2024, 1, 31), days=1) == date(2024, 2, 1)
    assert shift_date(date(2026, 3, 1), days=-1) == date(2026, 2, 28)
    assert shift_date(date(2026, 1, 1), days=-1) == date(2025, 12, 31)
    assert shift_date(date(2026, 2, 15), months=11) == date(2027, 1, 15)
    # Feb 31st rolls into March
    assert shift_date(date(2026, 1, 31), months=1) == date(2026, 3, 3)


def test_yesterday_and_tomorrow(reference):
    assert is_yesterday(datetime(2026, 3, 17, 9, 0), reference)
    assert not is_today(datetime(2026, 3, 17, 9, 0), reference)
    assert is_tomorrow(reference + timedelta(days=1), reference)
    assert not is_tomorrow(reference + timedelta(days=2), reference)


def test_yesterday_across_month_and_year():
    assert is_yesterday(datetime(2026, 2, 28, 23, 0), datetime(2026, 3, 1, 10, 0))
    assert is_yesterday(datetime(2025, 12, 31, 23, 59), datetime(2026, 1, 1, 0, 1))
    assert is_tomorrow(datetime(2027, 1, 1, 8, 0), datetime(2026, 12, 31, 20, 0))


def test_day_delta_rounds_up(reference):
    assert day_delta(reference - timedelta(hours=1), reference) == 1
    assert day_delta(reference, reference) == 0
    assert day_delta(reference + timedelta(days=5), reference) == -5


def test_week_predicates(reference):
    monday_this_week = datetime(2026, 3, 16, 8, 0)
    monday_last_week = datetime(2026, 3, 9, 12, 0)
    monday_next_week = datetime(2026, 3, 23, 12, 0)

    assert is_this_week(monday_this_week, reference)
    assert not is_last_week(monday_this_week, reference)

    assert is_last_week(monday_last_week, reference)
    assert not is_this_week(monday_last_week, reference)

    assert is_next_week(monday_next_week, reference)
    assert not is_this_week(monday_next_week, reference)


def test_this_week_requires_past_target(reference):
    # Same ISO week, but later than the reference
    assert not is_this_week(datetime(2026, 3, 20, 9, 0), reference)


def test_week_numbers_wrap_modulo_52():
    # 2026 has an ISO week 53; it collapses onto week 1
    assert week_of_year(date(2026, 12, 28)) == 1
    assert week_of_year(date(2026, 12, 28)) == week_of_year(date(2026, 1, 1))
    assert week_of_year(date(2026, 3, 18)) == 12


def test_month_predicates_same_year(reference):
    assert is_this_month(datetime(2026, 3, 1), reference)
    assert is_last_month(datetime(2026, 2, 20), reference)
    assert is_next_month(datetime(2026, 4, 2), reference)
    assert not is_last_month(datetime(2025, 2, 20), reference)


def test_last_month_rolls_over_year_boundary():
    december = datetime(2025, 12, 15, 10, 0)
    january = datetime(2026, 1, 15, 10, 0)

    assert is_last_month(december, january)
    assert not is_this_month(december, january)
    assert is_next_month(january, december)


def test_year_predicates(reference):
    assert is_this_year(datetime(2026, 1, 1), reference)
    assert is_last_year(datetime(2025, 6, 1), reference)
    assert is_next_year(datetime(2027, 6, 1), reference)
    assert not is_next_year(datetime(2026, 6, 1), reference)
    assert not is_this_year(datetime(2027, 6, 1), reference)


def test_day_shift_predicates_are_total_at_calendar_limits():
    last = datetime(9999, 12, 31, 12, 0)
    first = datetime(1, 1, 1, 0, 0)

    assert not is_tomorrow(last, last)
    assert is_yesterday(datetime(9999, 12, 30, 8, 0), last)
    assert not is_yesterday(first, first)
    assert is_tomorrow(datetime(1, 1, 2, 8, 0), first)

    assert evaluate_all(last, datetime(9999, 12, 31, 13, 0))["today"] is True
    assert evaluate_all(first, datetime(1, 1, 1, 1, 0))["yesterday"] is False
