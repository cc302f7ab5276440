"""
Exception types raised by the reconciliation engine.
"""


class ReconciliationError(Exception):
    """Base class for all errors raised by shift_reconcile."""

    pass


class InvalidTimeFormat(ReconciliationError, ValueError):
    """Raised when a shift boundary is not a valid 24-hour HH:MM[:SS] time."""

    pass


class InvalidDayOfMonth(ReconciliationError, ValueError):
    """Raised when a day number does not exist in the given month/year."""

    pass


class InvalidDate(ReconciliationError, ValueError):
    """Raised when a date or week key is not a valid ISO 8601 calendar date."""

    pass


class ConfigurationError(ReconciliationError):
    """Raised for invalid reconciliation configuration."""

    pass


class StoreError(ReconciliationError):
    """Raised when a schedule store file cannot be decoded."""

    pass
