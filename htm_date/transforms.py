"""Field transforms: timestamp -> scalar value of each date sub-field."""

import datetime as dt
from typing import AbstractSet, Iterable, List, Sequence, Tuple

from .fields import DEFAULT_HOLIDAYS, DateField
from .timeparts import (
    SECONDS_PER_DAY,
    DateParts,
    anniversary,
    to_datetime,
    whole_days,
    whole_seconds,
)


def season(parts: DateParts) -> float:
    return float(parts.day_of_year)


def day_of_week(parts: DateParts) -> float:
    return float(parts.day_of_week)


def weekend(parts: DateParts) -> float:
    """1 on Saturday, Sunday or Friday evening (after 18:00)."""
    dow = parts.day_of_week
    is_weekend = dow in (5, 6) or (dow == 4 and parts.time_of_day > 18.0)
    return 1.0 if is_weekend else 0.0


def custom_day(parts: DateParts, days: AbstractSet[int]) -> float:
    return 1.0 if parts.day_of_week in days else 0.0


def time_of_day(parts: DateParts) -> float:
    return parts.time_of_day


def holidayness(when: dt.datetime, holidays: Sequence[Tuple[int, int]]) -> float:
    """Proximity of ``when`` to the nearest fixed-date holiday, in [0, 1].

    1 for the whole holiday, ramping linearly 0->1 over the day before and
    1->0 over the day after. Holidays are checked in order; a match on the
    holiday or the day after ends the search, a match on the day before
    does not, so a later holiday's day-before ramp replaces it.
    """
    value = 0.0
    for month, day in holidays:
        hdate = anniversary(when, month, day)
        if hdate is None:
            continue
        if when > hdate:
            days = whole_days(hdate, when)
            if days == 0:
                value = 1.0
                break
            if days == 1:
                value = 1.0 - (whole_seconds(hdate, when) - SECONDS_PER_DAY) / SECONDS_PER_DAY
                break
        elif whole_days(when, hdate) == 0:
            value = 1.0 - whole_seconds(when, hdate) / SECONDS_PER_DAY
    return value


def compute_scalars(value,
                    kinds: Iterable[DateField],
                    custom_days: AbstractSet[int] = frozenset(),
                    holidays: Sequence[Tuple[int, int]] = DEFAULT_HOLIDAYS) -> List[float]:
    """Scalar value of each field in ``kinds``, in encoding order.

    ``value`` is anything :func:`to_datetime` accepts.
    """
    when = to_datetime(value)
    parts = DateParts.from_datetime(when)
    active = set(kinds)

    scalars = []
    for kind in DateField:
        if kind not in active:
            continue
        if kind is DateField.SEASON:
            scalars.append(season(parts))
        elif kind is DateField.DAY_OF_WEEK:
            scalars.append(day_of_week(parts))
        elif kind is DateField.WEEKEND:
            scalars.append(weekend(parts))
        elif kind is DateField.CUSTOM_DAYS:
            scalars.append(custom_day(parts, custom_days))
        elif kind is DateField.HOLIDAY:
            scalars.append(holidayness(when, holidays))
        else:
            scalars.append(time_of_day(parts))
    return scalars
