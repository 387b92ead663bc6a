"""Composite date encoder built from per-field scalar encoders."""

import logging
from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from .exceptions import IllegalState, InvalidConfiguration, InvalidInput
from .fields import (
    DEFAULT_HOLIDAYS,
    CustomDaysSpec,
    DateField,
    FieldSpec,
    HolidaySpec,
    default_specs,
    parse_weekdays,
    resolve_holidays,
)
from .scalar import ScalarEncoder
from .transforms import compute_scalars

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveField:
    """An enabled date sub-field bound to its encoder and output offset."""
    kind: DateField
    name: str
    encoder: ScalarEncoder
    offset: int

    @property
    def width(self) -> int:
        return self.encoder.width


class DateEncoder:
    """Encode a timestamp as the concatenation of several sub-encodings.

    Each enabled sub-field (season, day of week, weekend, custom days,
    holiday, time of day) is turned into a scalar and encoded by its own
    :class:`ScalarEncoder`. The outputs are laid out in that fixed order,
    whatever order the fields were configured in, so bit offsets and the
    order of scalars and bucket indices are always the same for a given
    set of enabled fields.

    An encoder is immutable once built. Use :meth:`builder` (or
    :class:`htm_date.config.DateEncoderConfig`) to configure a new one.
    """

    def __init__(self, specs: Iterable[FieldSpec] = (), name: str = ""):
        by_kind: Dict[DateField, FieldSpec] = {}
        for spec in specs:
            if spec.kind in by_kind:
                raise InvalidConfiguration(f"{spec.kind.label} is configured more than once")
            by_kind[spec.kind] = spec

        fields: List[ActiveField] = []
        width = 0
        custom_days: FrozenSet[int] = frozenset()
        holidays = DEFAULT_HOLIDAYS

        # The order of adding encoders matters: offsets follow DateField order
        for kind in DateField:
            spec = by_kind.get(kind)
            if spec is None:
                continue
            spec.validate()
            if isinstance(spec, HolidaySpec):
                holidays = resolve_holidays(spec.holidays)
            if not spec.enabled:
                continue
            if isinstance(spec, CustomDaysSpec):
                custom_days = parse_weekdays(spec.days)

            # Date sub-fields use far fewer than the recommended 21 bits
            encoder = ScalarEncoder(
                min_val=kind.min_val,
                max_val=kind.max_val,
                w=spec.width,
                radius=spec.radius,
                periodic=kind.periodic,
                name=spec.encoder_name,
                forced=True,
            )
            fields.append(ActiveField(kind=kind, name=kind.label, encoder=encoder, offset=width))
            width += encoder.width

        self._name = name
        self._fields: Tuple[ActiveField, ...] = tuple(fields)
        self._width = width
        self._custom_days = custom_days
        self._holidays = holidays
        self._frozen = True

        if not fields:
            log.warning("DateEncoder %r built with no active fields", name)
        else:
            log.debug("DateEncoder %r layout: %s (width=%d)", name,
                      ", ".join(f"{f.name}@{f.offset}+{f.width}" for f in fields), width)

    def __setattr__(self, key, value):
        if getattr(self, "_frozen", False):
            raise AttributeError("DateEncoder is immutable; build a new one to change its configuration")
        super().__setattr__(key, value)

    @classmethod
    def builder(cls) -> "DateEncoder.Builder":
        return cls.Builder()

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> Tuple[ActiveField, ...]:
        return self._fields

    @property
    def width(self) -> int:
        """Total number of output bits."""
        return self._width

    total_width = width
    n = width
    w = width

    @property
    def custom_days(self) -> FrozenSet[int]:
        return self._custom_days

    @property
    def holidays(self) -> Tuple[Tuple[int, int], ...]:
        return self._holidays

    @property
    def is_delta(self) -> bool:
        return False

    def get_scalars(self, value) -> List[float]:
        """Scalar value of each active sub-field, in encoding order."""
        return compute_scalars(value, [f.kind for f in self._fields],
                               self._custom_days, self._holidays)

    def get_encoded_values(self, value) -> List[str]:
        return [str(s) for s in self.get_scalars(value)]

    def get_scalar_names(self) -> List[str]:
        return [f.name for f in self._fields]

    def get_description(self) -> List[Tuple[str, int]]:
        """``(name, offset)`` of each active sub-field."""
        return [(f.name, f.offset) for f in self._fields]

    def encode_into_array(self, value, output) -> None:
        """Write the encoding of ``value`` into ``output[:width]``."""
        scalars = self.get_scalars(value)
        if len(output) < self._width:
            raise InvalidInput(f"output buffer has {len(output)} bits, need {self._width}")
        for field, scalar in zip(self._fields, scalars):
            output[field.offset:field.offset + field.width] = field.encoder.encode(scalar)

    def encode(self, value) -> np.ndarray:
        """Create SDR for a timestamp."""
        sdr = np.zeros(self._width, dtype=np.int32)
        self.encode_into_array(value, sdr)
        return sdr

    def encode_many(self, values) -> np.ndarray:
        """Encode each timestamp in ``values`` into one row of a 2D array."""
        rows = [self.encode(v) for v in values]
        if not rows:
            return np.zeros((0, self._width), dtype=np.int32)
        return np.vstack(rows)

    def get_bucket_indices(self, value) -> List[int]:
        """Bucket index of each active sub-field, in encoding order."""
        scalars = self.get_scalars(value)
        if not self._fields:
            raise IllegalState("DateEncoder has no active fields to compute bucket indices with")
        indices: List[int] = []
        for field, scalar in zip(self._fields, scalars):
            indices.extend(field.encoder.get_bucket_indices(scalar))
        return indices

    def __repr__(self):
        layout = ", ".join(f"{f.name}={f.encoder.w}/{f.width}" for f in self._fields)
        return f"DateEncoder(name={self._name!r}, width={self._width}, fields=[{layout}])"

    class Builder:
        """Fluent configuration for a :class:`DateEncoder`.

        Every field is disabled until given a positive width. Omitting the
        radius (or day / holiday list) keeps the current value. A builder
        can be reused to build several independent encoders.
        """

        def __init__(self):
            self._specs: Dict[DateField, FieldSpec] = {s.kind: s for s in default_specs()}
            self._name = ""

        def _set(self, kind: DateField, width: int, radius: Optional[float] = None, **extra):
            current = self._specs[kind]
            if radius is None:
                radius = current.radius
            extra = {k: v for k, v in extra.items() if v is not None}
            self._specs[kind] = replace(current, width=width, radius=radius, **extra)
            return self

        def season(self, width: int, radius: Optional[float] = None) -> "DateEncoder.Builder":
            return self._set(DateField.SEASON, width, radius)

        def day_of_week(self, width: int, radius: Optional[float] = None) -> "DateEncoder.Builder":
            return self._set(DateField.DAY_OF_WEEK, width, radius)

        def weekend(self, width: int, radius: Optional[float] = None) -> "DateEncoder.Builder":
            return self._set(DateField.WEEKEND, width, radius)

        def custom_days(self, width: int, days=None) -> "DateEncoder.Builder":
            """``days`` is a weekday name, a comma separated string or a list of names."""
            return self._set(DateField.CUSTOM_DAYS, width, days=days)

        def holiday(self, width: int, radius: Optional[float] = None,
                    holidays=None) -> "DateEncoder.Builder":
            """``holidays`` is a list of ``(month, day)`` pairs."""
            return self._set(DateField.HOLIDAY, width, radius, holidays=holidays)

        def time_of_day(self, width: int, radius: Optional[float] = None) -> "DateEncoder.Builder":
            return self._set(DateField.TIME_OF_DAY, width, radius)

        def name(self, name: str) -> "DateEncoder.Builder":
            self._name = name
            return self

        def build(self) -> "DateEncoder":
            return DateEncoder(self._specs.values(), name=self._name)
