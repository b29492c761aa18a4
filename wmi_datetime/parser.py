"""
Fixed-width parser for CIM ("WMI") datetime strings.

Input structure (positions are character indices):
  - 0-13:  YYYYMMDDHHMMSS local date and time
  - 14:    ``.`` separator
  - 15-20: raw six-digit subsecond field
  - 21+:   signed UTC offset in minutes, e.g. ``-180`` or ``+060``

Example: ``20190113200517.500000-180``

The format has no delimiters inside the date/time portion, so parsing
is a single positional pass. The first bad field ends the parse.

Validation order:
  1. Length (``MalformedInputError``).
  2. Offset tail (``InvalidOffsetError``).
  3. Date/time fields left to right (``InvalidDateTimeComponentError``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from wmi_datetime.exceptions import (
    InternalFormattingError,
    InvalidDateTimeComponentError,
    InvalidOffsetError,
    MalformedInputError,
)

MIN_LENGTH = 21

SEPARATOR_INDEX = 14

# Exclusive bound on |offset|, in seconds
MAX_OFFSET_SECONDS = 24 * 60 * 60

MAX_MICROSECOND = 999_999

# (field name, start, end) for each fixed-width numeric field
_FIELDS: tuple[tuple[str, int, int], ...] = (
    ("year", 0, 4),
    ("month", 4, 6),
    ("day", 6, 8),
    ("hour", 8, 10),
    ("minute", 10, 12),
    ("second", 12, 14),
    ("subsecond", 15, 21),
)

_DIGITS = re.compile(r"[0-9]+")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class WMIFields:
    """Numeric fields of a CIM datetime string, before normalization.

    Attributes:
        subsecond: The raw six-digit field exactly as written. See
            ``normalize_subsecond()`` for its effective value.
        offset_minutes: Signed UTC offset in whole minutes.
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    subsecond: int
    offset_minutes: int

    @property
    def offset_seconds(self) -> int:
        return self.offset_minutes * 60


def _parse_offset(tail: str) -> int:
    """Parse the offset tail into minutes, checking the representable range."""
    if not _SIGNED_INT.fullmatch(tail):
        if not tail:
            raise InvalidOffsetError("UTC offset is missing")
        raise InvalidOffsetError(f"UTC offset is not an integer: {tail!r}")

    # int() limits digit count including leading zeros, so parse only significant digits
    sign = "-" if tail.startswith("-") else ""
    digits = tail.lstrip("+-").lstrip("0") or "0"
    if len(digits) > 4:
        shown = tail if len(tail) <= 16 else tail[:16] + "..."
        raise InvalidOffsetError(
            f"UTC offset {shown!r} is out of range "
            f"(must be strictly between -1440 and 1440)"
        )

    minutes = int(sign + digits)
    if abs(minutes * 60) >= MAX_OFFSET_SECONDS:
        raise InvalidOffsetError(
            f"UTC offset of {minutes} minutes is out of range "
            f"(must be strictly between -1440 and 1440)"
        )
    return minutes


def _parse_component(text: str, name: str, start: int, end: int) -> int:
    chunk = text[start:end]
    if not _DIGITS.fullmatch(chunk):
        raise InvalidDateTimeComponentError(
            name, f"invalid {name} component: {chunk!r}"
        )
    return int(chunk)


def parse_fields(text: str) -> WMIFields:
    """Split a CIM datetime string into its numeric fields.

    Args:
        text: A string such as ``"20190113200517.500000-180"``.

    Returns:
        WMIFields with the raw (not yet normalized) subsecond value.

    Raises:
        MalformedInputError: If *text* is shorter than 21 characters.
        InvalidOffsetError: If the offset tail is missing, not an integer,
            or outside +/-24 hours.
        InvalidDateTimeComponentError: If any fixed-width field contains
            a non-digit character, or character 14 is not ``.``.
    """
    if len(text) < MIN_LENGTH:
        raise MalformedInputError(
            f"CIM datetime is too short ({len(text)} < {MIN_LENGTH} characters): "
            f"{text!r}"
        )

    offset_minutes = _parse_offset(text[MIN_LENGTH:])
    values: dict[str, int] = {}
    for name, start, end in _FIELDS:
        if name == "subsecond" and text[SEPARATOR_INDEX] != ".":
            raise InvalidDateTimeComponentError(
                name, f"expected '.' before subsecond component, got {text[SEPARATOR_INDEX]!r}"
            )
        values[name] = _parse_component(text, name, start, end)
    return WMIFields(offset_minutes=offset_minutes, **values)


def normalize_subsecond(raw: int) -> int:
    """Return the effective microsecond value of a raw subsecond field.

    WMI writes the field as microseconds without the leading zeros, so
    ``.500000`` means 500 microseconds and ``.001000`` means 1. The
    effective value is always ``raw // 1000``.

    Raises:
        InternalFormattingError: If the result is outside [0, 999999].
            A six-digit field can never produce this.
    """
    microsecond = raw // 1000
    if not 0 <= microsecond <= MAX_MICROSECOND:
        raise InternalFormattingError(
            f"subsecond {raw} normalizes to {microsecond}, outside 0..{MAX_MICROSECOND}"
        )
    return microsecond
