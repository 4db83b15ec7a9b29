from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Callable

from reldate.core.contract import SECONDS_PER_DAY, WEEKS_PER_YEAR


Predicate = Callable[[datetime, datetime], bool]


# ----------------------------
# Date helpers
# ----------------------------

def shift_date(d: date, days: int = 0, months: int = 0, years: int = 0) -> date:
    """
    Build the calendar date (day + days, month + months, year + years) and
    normalize out-of-range fields the way a lenient date constructor would:
    month overflow carries into years, day overflow carries into months.

    shift_date(date(2024, 1, 31), days=1) -> 2024-02-01
    shift_date(date(2024, 1, 1), days=-1) -> 2023-12-31
    """
    y, m0 = divmod((d.month - 1) + months, 12)
    first = date(d.year + years + y, m0 + 1, 1)
    return first + timedelta(days=d.day - 1 + days)


def _calendar_date(d: date) -> date:
    return date(d.year, d.month, d.day)


def day_delta(target: datetime, reference: datetime) -> int:
    """Whole days from target to reference, rounded up. Negative for future targets."""
    return math.ceil((reference - target).total_seconds() / SECONDS_PER_DAY)


def week_of_year(d: date) -> int:
    """ISO week number reduced modulo 52 (week 52 and week 0 compare equal)."""
    return d.isocalendar()[1] % WEEKS_PER_YEAR


# ----------------------------
# Day predicates
# ----------------------------

def is_today(target: datetime, reference: datetime) -> bool:
    return (target.day, target.month, target.year) == (reference.day, reference.month, reference.year)


def is_yesterday(target: datetime, reference: datetime) -> bool:
    try:
        return _calendar_date(target) == shift_date(reference, days=-1)
    except OverflowError:
        # reference is date.min
        return False


def is_tomorrow(target: datetime, reference: datetime) -> bool:
    try:
        return _calendar_date(target) == shift_date(reference, days=1)
    except OverflowError:
        # reference is date.max
        return False


# ----------------------------
# Week predicates
# ----------------------------
# Week numbers compare mod 52, so weeks around New Year can collide.

def is_this_week(target: datetime, reference: datetime) -> bool:
    days = day_delta(target, reference)
    return 0 <= days < 7 and week_of_year(target) == week_of_year(reference)


def is_last_week(target: datetime, reference: datetime) -> bool:
    days = day_delta(target, reference)
    return 0 <= days < 14 and week_of_year(target) == (week_of_year(reference) - 1) % WEEKS_PER_YEAR


def is_next_week(target: datetime, reference: datetime) -> bool:
    days = day_delta(target, reference)
    return abs(days) < 14 and week_of_year(target) == (week_of_year(reference) + 1) % WEEKS_PER_YEAR


# ----------------------------
# Month predicates
# ----------------------------

def is_this_month(target: datetime, reference: datetime) -> bool:
    return (target.year, target.month) == (reference.year, reference.month)


def is_last_month(target: datetime, reference: datetime) -> bool:
    if target.year == reference.year:
        return target.month == reference.month - 1
    # January looking back at December
    return target.year == reference.year - 1 and target.month == 12 and reference.month == 1


def is_next_month(target: datetime, reference: datetime) -> bool:
    if target.year == reference.year:
        return target.month == reference.month + 1
    # December looking ahead to January
    return target.year == reference.year + 1 and target.month == 1 and reference.month == 12


# ----------------------------
# Year predicates
# ----------------------------

def is_this_year(target: datetime, reference: datetime) -> bool:
    return target.year == reference.year


def is_last_year(target: datetime, reference: datetime) -> bool:
    return target.year == reference.year - 1


def is_next_year(target: datetime, reference: datetime) -> bool:
    return target.year == reference.year + 1


PREDICATES: dict[str, Predicate] = {
    "today": is_today,
    "yesterday": is_yesterday,
    "tomorrow": is_tomorrow,
    "last-week": is_last_week,
    "this-week": is_this_week,
    "next-week": is_next_week,
    "last-month": is_last_month,
    "this-month": is_this_month,
    "next-month": is_next_month,
    "last-year": is_last_year,
    "this-year": is_this_year,
    "next-year": is_next_year,
}

RELATIONSHIPS: tuple[str, ...] = tuple(PREDICATES)


def evaluate_all(target: datetime, reference: datetime) -> dict[str, bool]:
    """
    Evaluate every calendar relationship once.
    Returns a name -> bool mapping in RELATIONSHIPS order.
    """
    return {name: fn(target, reference) for name, fn in PREDICATES.items()}
