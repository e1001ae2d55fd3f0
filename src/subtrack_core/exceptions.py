"""Custom exceptions for SubTrack Core."""

from decimal import Decimal


class SubtrackError(Exception):
    """Base exception for all SubTrack Core errors."""

    pass


class ConfigurationError(SubtrackError):
    """Raised when configuration is invalid or missing."""

    pass


class DivisionByZeroError(SubtrackError, ZeroDivisionError):
    """Raised when a money amount is divided by zero."""

    pass


class InvalidIntervalError(SubtrackError):
    """Raised when a billing interval quantity is not a positive integer."""

    pass


class UnsupportedUnitError(SubtrackError):
    """Raised when a billing unit is not daily, weekly, monthly or yearly."""

    def __init__(self, unit: object, message: str | None = None):
        self.unit = unit
        super().__init__(message or f"Unsupported billing unit: {unit!r}")


class InvalidPercentileError(SubtrackError):
    """Raised when a percentile falls outside [0, 100]."""

    pass


class MismatchedLengthError(SubtrackError):
    """Raised when paired series have different lengths."""

    pass


class InvalidSmoothingFactorError(SubtrackError):
    """Raised when an EMA smoothing factor falls outside (0, 1]."""

    pass


class InvalidWindowError(SubtrackError):
    """Raised when a moving window or momentum period is smaller than 1."""

    pass


class UnbalancedLedgerError(SubtrackError):
    """Raised when participant balances do not sum to zero within tolerance."""

    def __init__(self, residual: Decimal, message: str | None = None):
        self.residual = residual
        super().__init__(
            message or f"Participant balances do not net to zero (residual {residual})"
        )


class InvalidSplitError(SubtrackError):
    """Raised when an expense cannot be split with the given counts or weights."""

    pass
