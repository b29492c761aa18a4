"""
Custom exception hierarchy for wmi-datetime.

Why a custom hierarchy:
- Callers can catch specific failures (e.g., InvalidOffsetError vs
  MalformedInputError) or the whole family via WMIDateTimeError.
- Input errors also subclass ValueError/TypeError so that generic
  frameworks (pydantic validators, pandas apply loops) treat them as
  ordinary data errors without knowing about this package.
- InternalFormattingError is a RuntimeError: it signals a broken
  invariant, never bad user input.
"""

from __future__ import annotations

EXPECTED_SHAPE = "a timestamp in WMI format"


class WMIDateTimeError(Exception):
    """Base exception for all wmi-datetime errors."""


class MalformedInputError(WMIDateTimeError, ValueError):
    """Raised when a CIM datetime string is shorter than 21 characters."""


class InvalidOffsetError(WMIDateTimeError, ValueError):
    """Raised when the UTC offset tail is missing, non-numeric, or out of range.

    The tail is everything after character 21 and must be a signed
    integer number of minutes whose magnitude stays below 24 hours.
    """


class InvalidDateTimeComponentError(WMIDateTimeError, ValueError):
    """Raised when a fixed-width date/time field is not a valid value.

    Covers non-digit characters in any field as well as values that do
    not exist on the calendar (month 13, April 31st, hour 24, ...).
    The offending field is available as ``component``.
    """

    def __init__(self, component: str, message: str) -> None:
        super().__init__(message)
        self.component = component


class TypeMismatchError(WMIDateTimeError, TypeError):
    """Raised by the decode adapter when the input value is not a string."""

    def __init__(self, received: object, expected: str = EXPECTED_SHAPE) -> None:
        super().__init__(
            f"invalid type: {type(received).__name__}, expected {expected}"
        )
        self.expected = expected


class InternalFormattingError(WMIDateTimeError, RuntimeError):
    """Raised when a constructed instant violates an internal invariant.

    Never caused by externally supplied text; seeing one means a bug.
    """


class ConfigValidationError(WMIDateTimeError):
    """Raised when wmiconfig.yaml is empty or names an unknown backend."""


class ParsingError(WMIDateTimeError):
    """Raised when a DataFrame column cannot be converted.

    For example, a listed column is missing from the frame, or a cell
    holds an invalid CIM datetime while ``errors="raise"``.
    """


class ExportError(WMIDateTimeError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
