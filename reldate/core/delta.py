from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from reldate.core.contract import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_MONTH,
    SECONDS_PER_WEEK,
)


@dataclass(frozen=True)
class Magnitudes:
    minutes: int
    hours: int
    days: int
    weeks: int
    months: int
    years: int


def delta_seconds(target: datetime, reference: datetime) -> float:
    """
    Signed difference reference - target in seconds (sub-second precision kept).
    Positive = target is in the past.
    """
    return (reference - target).total_seconds()


def compute_magnitudes(target: datetime, reference: datetime) -> Magnitudes:
    """
    Elapsed counters substituted into templates.

    Time-based units round up; `years` is a plain calendar-field subtraction
    and does not look at the delta at all.
    """
    delta = delta_seconds(target, reference)

    return Magnitudes(
        minutes=math.ceil(delta / SECONDS_PER_MINUTE),
        hours=math.ceil(delta / SECONDS_PER_HOUR),
        days=math.ceil(delta / SECONDS_PER_DAY),
        weeks=math.ceil(delta / SECONDS_PER_WEEK),
        months=math.ceil(delta / SECONDS_PER_MONTH),
        years=reference.year - target.year,
    )
