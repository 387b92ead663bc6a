"""Scalar encoding utilities."""

import math
import warnings
from typing import List, Optional, Tuple

import numpy as np

from .exceptions import InvalidConfiguration, InvalidInput

# Below this many active bits an SDR is too easy to confuse with noise.
MIN_REASONABLE_W = 21


class ScalarEncoder:
    """Encode scalar values as a contiguous run of ``w`` active bits.

    The output width is derived from ``radius`` (or ``resolution``) unless
    ``n_bits`` is given. Two values closer than ``radius`` share active
    bits. Periodic encoders wrap the run of bits around the end of the
    array so that ``max_val`` coincides with ``min_val``.
    """

    def __init__(self,
                 min_val=0,
                 max_val=100,
                 n_bits=0,
                 w=11,
                 radius=0.0,
                 resolution=0.0,
                 periodic=False,
                 clip_input=False,
                 name=None,
                 forced=False):

        if w <= 0:
            raise InvalidConfiguration(f"w must be a positive number of bits, got {w}")
        if max_val <= min_val:
            raise InvalidConfiguration(
                f"max_val ({max_val}) must be greater than min_val ({min_val})")

        self.min_val = float(min_val)
        self.max_val = float(max_val)
        self.w = int(w)
        self.periodic = bool(periodic)
        self.clip_input = bool(clip_input)
        self.half_width = (self.w - 1) // 2
        # Non-periodic encoders need room for the run of bits at both ends
        self.padding = 0 if self.periodic else self.w // 2

        range_internal = self.max_val - self.min_val
        if n_bits:
            n_bits = int(n_bits)
            if self.periodic and n_bits < self.w:
                raise InvalidConfiguration(f"n_bits ({n_bits}) must be at least w ({self.w})")
            if not self.periodic and n_bits <= self.w:
                raise InvalidConfiguration(f"n_bits ({n_bits}) must be greater than w ({self.w})")
            if self.periodic:
                self.resolution = range_internal / n_bits
            else:
                self.resolution = range_internal / (n_bits - self.w)
            self.radius = self.w * self.resolution
        elif radius > 0:
            self.radius = float(radius)
            self.resolution = self.radius / self.w
        elif resolution > 0:
            self.resolution = float(resolution)
            self.radius = self.resolution * self.w
        else:
            raise InvalidConfiguration("One of n_bits, radius or resolution must be positive")

        if self.periodic:
            self.range = range_internal
        else:
            self.range = range_internal + self.resolution

        if n_bits:
            self.n_bits = n_bits
        else:
            self.n_bits = int(math.ceil(self.w * (self.range / self.radius) + 2 * self.padding))
            # A radius wider than the range leaves no room for w bits
            if self.periodic and self.n_bits < self.w:
                raise InvalidConfiguration(
                    f"{name or 'ScalarEncoder'}: radius {self.radius:g} gives {self.n_bits} "
                    f"output bits, fewer than w ({self.w})")
            if not self.periodic and self.n_bits <= self.w:
                raise InvalidConfiguration(
                    f"{name or 'ScalarEncoder'}: radius {self.radius:g} gives {self.n_bits} "
                    f"output bits, need more than w ({self.w})")
        self.n_internal = self.n_bits - 2 * self.padding

        self.name = name or f"[{self.min_val:g}:{self.max_val:g}]"

        if not forced:
            self._check_reasonable_settings()

    def _check_reasonable_settings(self):
        if self.w < MIN_REASONABLE_W:
            warnings.warn(
                f"{self.name}: w={self.w} is below the recommended {MIN_REASONABLE_W} "
                "active bits; pass forced=True to skip this check")

    @property
    def width(self) -> int:
        """Number of bits in the output."""
        return self.n_bits

    @property
    def n(self) -> int:
        return self.n_bits

    def _first_on_bit(self, value) -> int:
        """Index of the first active bit for ``value`` (may be negative if periodic)."""
        try:
            value = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"{self.name}: cannot encode {value!r}") from exc
        if math.isnan(value):
            raise InvalidInput(f"{self.name}: cannot encode NaN")

        if value < self.min_val:
            if self.clip_input and not self.periodic:
                value = self.min_val
            else:
                raise InvalidInput(
                    f"{self.name}: input ({value}) less than range "
                    f"({self.min_val} - {self.max_val})")

        if self.periodic:
            if value >= self.max_val:
                raise InvalidInput(
                    f"{self.name}: input ({value}) greater than periodic range "
                    f"({self.min_val} - {self.max_val})")
        elif value > self.max_val:
            if self.clip_input:
                value = self.max_val
            else:
                raise InvalidInput(
                    f"{self.name}: input ({value}) greater than range "
                    f"({self.min_val} - {self.max_val})")

        if self.periodic:
            center = int((value - self.min_val) * self.n_internal / self.range) + self.padding
        else:
            center = int(((value - self.min_val) + self.resolution / 2) / self.resolution) + self.padding
        return center - self.half_width

    def encode_into_array(self, value, output) -> None:
        """Write the encoding of ``value`` into ``output[:width]``.

        ``None`` is treated as missing data and clears the output.
        """
        if len(output) < self.n_bits:
            raise InvalidInput(
                f"{self.name}: output buffer has {len(output)} bits, need {self.n_bits}")
        if value is None:
            output[:self.n_bits] = 0
            return

        minbin = self._first_on_bit(value)
        maxbin = minbin + self.w - 1
        output[:self.n_bits] = 0
        if self.periodic:
            if maxbin >= self.n_bits:
                output[:maxbin - self.n_bits + 1] = 1
                maxbin = self.n_bits - 1
            if minbin < 0:
                output[self.n_bits + minbin:self.n_bits] = 1
                minbin = 0
        output[minbin:maxbin + 1] = 1

    def encode(self, value) -> np.ndarray:
        """Create SDR for scalar value."""
        sdr = np.zeros(self.n_bits, dtype=np.int32)
        self.encode_into_array(value, sdr)
        return sdr

    def get_bucket_index(self, value) -> Optional[int]:
        if value is None:
            return None
        minbin = self._first_on_bit(value)
        if self.periodic:
            bucket = minbin + self.half_width
            if bucket < 0:
                bucket += self.n_bits
            return bucket
        return minbin

    def get_bucket_indices(self, value) -> List[Optional[int]]:
        return [self.get_bucket_index(value)]

    def get_description(self) -> List[Tuple[str, int]]:
        return [(self.name, 0)]

    def __repr__(self):
        return (f"ScalarEncoder(name={self.name!r}, w={self.w}, n={self.n_bits}, "
                f"radius={self.radius:g}, min_val={self.min_val:g}, "
                f"max_val={self.max_val:g}, periodic={self.periodic})")
