"""Calendar arithmetic used by the date field transforms."""

import datetime as dt
from dataclasses import dataclass
from numbers import Number
from typing import Optional

import pandas as pd

from .exceptions import InvalidInput

SECONDS_PER_DAY = 86400


def to_datetime(value) -> dt.datetime:
    """Coerce ``value`` into a ``datetime.datetime``.

    Accepts datetimes, dates, pandas Timestamps, numpy datetime64 values and
    ISO-8601 strings. Numbers are refused since their epoch unit is
    ambiguous.
    """
    if value is None or value is pd.NaT:
        raise InvalidInput(f"DateEncoder requires a valid timestamp but got {value!r}")
    if isinstance(value, Number):
        raise InvalidInput(f"Numeric timestamps are not supported, got {value!r}")
    if isinstance(value, dt.datetime) and not isinstance(value, pd.Timestamp):
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Cannot interpret {value!r} as a timestamp") from exc
    if pd.isna(ts):
        raise InvalidInput(f"DateEncoder requires a valid timestamp but got {value!r}")
    return ts.to_pydatetime(warn=False)


@dataclass(frozen=True)
class DateParts:
    """Calendar fields of a timestamp. Weekday and day of year are 0-based."""
    year: int
    month: int
    day: int
    hour: int
    minute: int
    day_of_year: int
    day_of_week: int

    @classmethod
    def from_datetime(cls, when: dt.datetime) -> "DateParts":
        return cls(
            year=when.year,
            month=when.month,
            day=when.day,
            hour=when.hour,
            minute=when.minute,
            day_of_year=when.timetuple().tm_yday - 1,
            day_of_week=when.weekday(),
        )

    @property
    def time_of_day(self) -> float:
        """Hours since midnight, at minute resolution."""
        return self.hour + self.minute / 60.0


def _elapsed(start: dt.datetime, end: dt.datetime) -> dt.timedelta:
    # Aware values are compared as instants so DST shifts count as real time
    if start.tzinfo is not None and end.tzinfo is not None:
        start = start.astimezone(dt.timezone.utc)
        end = end.astimezone(dt.timezone.utc)
    return end - start


def whole_seconds(start: dt.datetime, end: dt.datetime) -> int:
    """Whole seconds elapsed from ``start`` to ``end`` (``start <= end``), fractions dropped."""
    delta = _elapsed(start, end)
    return delta.days * SECONDS_PER_DAY + delta.seconds


def whole_days(start: dt.datetime, end: dt.datetime) -> int:
    """Whole days elapsed from ``start`` to ``end`` (``start <= end``)."""
    return _elapsed(start, end).days


def anniversary(when: dt.datetime, month: int, day: int) -> Optional[dt.datetime]:
    """Midnight on ``month``/``day`` in the year of ``when``, in its time zone.

    Returns ``None`` when the date does not exist that year (Feb 29).
    """
    try:
        midnight = dt.datetime(when.year, month, day)
    except ValueError:
        return None
    tz = when.tzinfo
    if tz is None:
        return midnight
    if hasattr(tz, "localize"):
        # pytz zones need localize() to pick the offset in effect at midnight
        return tz.localize(midnight)
    return midnight.replace(tzinfo=tz)
