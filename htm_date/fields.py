"""Date sub-fields, their sub-encoder topologies and per-field settings."""

import calendar
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from .exceptions import InvalidConfiguration

# Lower-cased weekday names and abbreviations, Monday = 0
WEEKDAYS = {
    "mon": 0, "monday": 0,
    "tue": 1, "tuesday": 1,
    "wed": 2, "wednesday": 2,
    "thu": 3, "thursday": 3,
    "fri": 4, "friday": 4,
    "sat": 5, "saturday": 5,
    "sun": 6, "sunday": 6,
}

# Fixed-date holidays as (month, day); only December 25 by default
DEFAULT_HOLIDAYS = ((12, 25),)


class DateField(Enum):
    """Sub-fields of a date, declared in the order they are encoded.

    Each member carries the topology of its scalar sub-encoder:
    ``(label, min_val, max_val, periodic, default_radius)``.
    """

    # Day of year; leap years are ignored by assuming 366 days.
    # Default radius is one season.
    SEASON = ("season", 0, 366, True, 91.5)
    # Monday = 0, one bucket per day
    DAY_OF_WEEK = ("day of week", 0, 7, True, 1.0)
    WEEKEND = ("weekend", 0, 1, False, 1.0)
    CUSTOM_DAYS = ("customdays", 0, 1, False, 1.0)
    # 1 on the holiday, ramping 0->1 the day before and 1->0 the day after
    HOLIDAY = ("holiday", 0, 1, False, 1.0)
    # Hours since midnight; 4 hour radius separates morning, afternoon, ...
    TIME_OF_DAY = ("time of day", 0, 24, True, 4.0)

    def __init__(self, label, min_val, max_val, periodic, default_radius):
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.periodic = periodic
        self.default_radius = default_radius


@dataclass(frozen=True)
class FieldSpec:
    """Width and radius of one date sub-field. ``width == 0`` disables it."""
    kind: DateField
    width: int = 0
    radius: Optional[float] = None

    def __post_init__(self):
        if self.radius is None:
            object.__setattr__(self, "radius", self.kind.default_radius)

    @property
    def enabled(self) -> bool:
        return self.width != 0

    @property
    def encoder_name(self) -> str:
        return self.kind.label

    def validate(self) -> None:
        expected = spec_class(self.kind)
        if type(self) is not expected:
            raise InvalidConfiguration(
                f"{self.kind.label} must be configured with a {expected.__name__}, "
                f"got a {type(self).__name__}")
        if isinstance(self.width, bool) or not isinstance(self.width, Integral):
            raise InvalidConfiguration(
                f"{self.kind.label}: width must be an integer, got {self.width!r}")
        if self.width < 0:
            raise InvalidConfiguration(f"{self.kind.label}: width must be >= 0, got {self.width}")
        if self.width > 0 and not self.radius > 0:
            raise InvalidConfiguration(f"{self.kind.label}: radius must be > 0, got {self.radius}")


@dataclass(frozen=True)
class CustomDaysSpec(FieldSpec):
    """Custom-days field: 1 on the listed weekdays, 0 otherwise."""
    kind: DateField = DateField.CUSTOM_DAYS
    days: Tuple[str, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "days", split_day_names(self.days))

    @property
    def encoder_name(self) -> str:
        return " ".join(self.days)

    def validate(self) -> None:
        super().validate()
        # Custom days are a 0/1 flag with a fixed radius
        if self.radius != DateField.CUSTOM_DAYS.default_radius:
            raise InvalidConfiguration(
                f"customdays: radius is fixed at {DateField.CUSTOM_DAYS.default_radius}, "
                f"got {self.radius}")
        parse_weekdays(self.days)


@dataclass(frozen=True)
class HolidaySpec(FieldSpec):
    """Holiday field with its list of fixed-date ``(month, day)`` holidays."""
    kind: DateField = DateField.HOLIDAY
    holidays: Tuple[Tuple[int, int], ...] = DEFAULT_HOLIDAYS

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "holidays", tuple(self.holidays))

    def validate(self) -> None:
        super().validate()
        resolve_holidays(self.holidays)


def split_day_names(days: Union[None, str, Iterable[str]]) -> Tuple[str, ...]:
    """Flatten a day name, a comma separated string or a list of names."""
    if days is None:
        return ()
    if isinstance(days, str):
        days = [days]
    names = []
    for entry in days:
        names.extend(part.strip() for part in str(entry).split(",") if part.strip())
    return tuple(names)


def parse_weekdays(days: Union[None, str, Iterable[str]]) -> FrozenSet[int]:
    """Resolve weekday names (case-insensitive) to indices, Monday = 0."""
    indices = set()
    for name in split_day_names(days):
        idx = WEEKDAYS.get(name.lower())
        if idx is None:
            raise InvalidConfiguration(f"Unable to understand {name} as a day of week")
        indices.add(idx)
    return frozenset(indices)


def resolve_holidays(holidays) -> Tuple[Tuple[int, int], ...]:
    """Validate ``(month, day)`` pairs; a day must exist in a leap year."""
    resolved = []
    for entry in holidays:
        if isinstance(entry, str):
            raise InvalidConfiguration(f"Holiday {entry!r} must be a (month, day) pair")
        try:
            month, day = (int(v) for v in entry)
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(
                f"Holiday {entry!r} must be a (month, day) pair") from exc
        if not 1 <= month <= 12:
            raise InvalidConfiguration(f"Holiday {entry!r}: month must be in 1..12")
        # 2000 was a leap year, so Feb 29 is accepted
        if not 1 <= day <= calendar.monthrange(2000, month)[1]:
            raise InvalidConfiguration(f"Holiday {entry!r}: no such day in month {month}")
        resolved.append((month, day))
    return tuple(resolved)


def spec_class(kind: DateField) -> type:
    """Settings record type that configures ``kind``."""
    if kind is DateField.CUSTOM_DAYS:
        return CustomDaysSpec
    if kind is DateField.HOLIDAY:
        return HolidaySpec
    return FieldSpec


def default_specs() -> Tuple[FieldSpec, ...]:
    """One disabled spec per field, in encoding order."""
    return tuple(spec_class(kind)(kind) for kind in DateField)
