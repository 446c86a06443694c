"""Exception hierarchy for date-time string parsing."""

from __future__ import annotations


class TimeParseError(ValueError):
    """Base exception for date-time parse failures.

    Keeps the offending input and the underlying exception, if any, so callers
    can branch on the subclass and still report the root cause.
    """

    def __init__(self, message: str, dt_str: str = "", wrapped: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.dt_str = dt_str
        self.wrapped = wrapped


class MalformedInputError(TimeParseError):
    """Raised when a string does not match the expected date-time layout."""


class MissingTimezoneError(TimeParseError):
    """Raised when a numeric offset is required but absent."""


class AmbiguousLocalTimeError(TimeParseError):
    """Raised when a local wall-clock time falls in a repeated interval."""


class NonexistentLocalTimeError(TimeParseError):
    """Raised when a local wall-clock time falls in a skipped interval."""
