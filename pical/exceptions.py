"""Exception types raised by pical."""

from typing import Optional


class PicalError(Exception):
    """Base class for all pical errors."""


class ICalSyntaxError(PicalError, ValueError):
    """
    Raised when iCal content cannot be split into calendars and components.

    Attributes:
        line_number: 1-based line number (after unfolding) where parsing failed
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number: Optional[int] = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class RRuleError(PicalError, ValueError):
    """Raised for a recurrence rule that cannot be used."""


class ConfigError(PicalError, ValueError):
    """Raised for an invalid configuration file or setting."""
