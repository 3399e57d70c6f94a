"""
Groups booking timestamps into periods, counts them, smooths the counts and,
for month and year views, appends one projected period.
"""
from collections import Counter
from datetime import datetime, time
from enum import Enum
from typing import Iterable, List, Tuple, Union

from app.analytics.smoothing import SmoothingMethod, smooth
from app.models.analytics import ForecastPoint, PeakHour

Moment = Union[datetime, time]
PeriodKey = Tuple[int, ...]

DEFAULT_GROWTH_FACTOR = 1.05


class Period(str, Enum):
    HOUR = "hour"
    TIME_SLOT = "time_slot"
    MONTH = "month"
    YEAR = "year"


PROJECTABLE = {Period.MONTH, Period.YEAR}


def to_12_hour(hour: int, minute: int = 0) -> str:
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def period_key(moment: Moment, period: Period) -> PeriodKey:
    if period == Period.HOUR:
        return (moment.hour,)
    if period == Period.TIME_SLOT:
        return (moment.hour, moment.minute)
    if isinstance(moment, time):
        raise ValueError(f"{period.value} grouping needs a date, got a time of day")
    if period == Period.MONTH:
        return (moment.year, moment.month)
    return (moment.year,)


def period_label(key: PeriodKey, period: Period) -> str:
    if period == Period.HOUR:
        return to_12_hour(key[0])
    if period == Period.TIME_SLOT:
        return to_12_hour(key[0], key[1])
    if period == Period.MONTH:
        return f"{key[0]:04d}-{key[1]:02d}"
    return f"{key[0]:04d}"


def next_key(key: PeriodKey, period: Period) -> PeriodKey:
    if period == Period.MONTH:
        year, month = key
        return (year + 1, 1) if month == 12 else (year, month + 1)
    if period == Period.YEAR:
        return (key[0] + 1,)
    raise ValueError(f"{period.value} periods are not projected")


def count_by_period(moments: Iterable[Moment], period: Period) -> List[Tuple[PeriodKey, int]]:
    """Counts per period, in chronological order of the period key."""
    counts = Counter(period_key(m, period) for m in moments if m is not None)
    return sorted(counts.items())


def build_forecast(
    moments: Iterable[Moment],
    period: Period,
    method: SmoothingMethod = SmoothingMethod.SMA,
    window: int = 3,
    alpha: float = 0.5,
    growth_factor: float = DEFAULT_GROWTH_FACTOR,
) -> List[ForecastPoint]:
    counted = count_by_period(moments, period)
    if not counted:
        return []

    raw = [count for _, count in counted]
    smoothed = smooth(raw, method, window=window, alpha=alpha)

    points = [
        ForecastPoint(period=period_label(key, period), raw_count=count, smoothed_value=value)
        for (key, count), value in zip(counted, smoothed)
    ]

    if period in PROJECTABLE:
        last_key = counted[-1][0]
        points.append(ForecastPoint(
            period=period_label(next_key(last_key, period), period),
            raw_count=None,
            smoothed_value=smoothed[-1] * growth_factor,
            projected=True,
        ))

    return points


def peak_periods(moments: Iterable[Moment], period: Period = Period.HOUR, limit: int = 5) -> List[PeakHour]:
    """Busiest periods by raw count; ties keep chronological order."""
    counted = count_by_period(moments, period)
    ranked = sorted(counted, key=lambda item: -item[1])[:limit]
    return [PeakHour(hour=period_label(key, period), count=count) for key, count in ranked]
