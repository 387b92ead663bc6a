"""HTM date encoding package."""

from .exceptions import DateEncoderError, InvalidConfiguration, InvalidInput, IllegalState
from .scalar import ScalarEncoder
from .fields import DateField, FieldSpec, CustomDaysSpec, HolidaySpec
from .date_encoder import ActiveField, DateEncoder
from .config import DateEncoderConfig

__all__ = [
    "DateEncoderError",
    "InvalidConfiguration",
    "InvalidInput",
    "IllegalState",
    "ScalarEncoder",
    "DateField",
    "FieldSpec",
    "CustomDaysSpec",
    "HolidaySpec",
    "ActiveField",
    "DateEncoder",
    "DateEncoderConfig",
]
