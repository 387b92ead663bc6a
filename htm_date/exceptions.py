"""Errors raised by the date encoder and its sub-encoders."""


class DateEncoderError(Exception):
    """Base class for all encoder errors."""


class InvalidConfiguration(DateEncoderError, ValueError):
    """Raised at build time when a field or sub-encoder is misconfigured."""


class InvalidInput(DateEncoderError, ValueError):
    """Raised when a value handed to an encoder cannot be encoded."""


class IllegalState(DateEncoderError, RuntimeError):
    """Raised when an operation is not possible for the encoder as built."""
