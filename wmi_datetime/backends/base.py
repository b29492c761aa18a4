"""
Backend protocol / ABC for building and formatting instants.

The core needs exactly three operations from a calendar library:
1. make_offset(): a fixed UTC offset from whole seconds.
2. make_naive(): a naive date-time from validated fields.
3. format_rfc3339(): the canonical ``YYYY-MM-DDTHH:MM:SS.ffffff+HH:MM`` string.

Everything else (calendar checks, subsecond normalization, attaching
the offset) is shared and lives in ``DateTimeBackend.build()``.
"""

from __future__ import annotations

import calendar
from abc import ABC, abstractmethod
from datetime import datetime, tzinfo

from wmi_datetime.exceptions import (
    InternalFormattingError,
    InvalidDateTimeComponentError,
    WMIDateTimeError,
)
from wmi_datetime.parser import WMIFields, normalize_subsecond


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise InvalidDateTimeComponentError(
            name, f"{name} {value} is out of range ({low}..{high})"
        )


class DateTimeBackend(ABC):
    """Abstract base class for calendar/time backends.

    Subclasses implement the three primitive operations and declare the
    year range they can represent.
    """

    name: str = ""
    min_year: int = 1
    max_year: int = 9999

    @abstractmethod
    def make_offset(self, seconds: int) -> tzinfo:
        """Build a fixed UTC offset. ``|seconds|`` is already below 24h."""

    @abstractmethod
    def make_naive(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        microsecond: int,
    ) -> datetime:
        """Build a naive date-time from calendar-checked fields."""

    @abstractmethod
    def format_rfc3339(self, value: datetime) -> str:
        """Format an offset-aware value with six fractional digits and a numeric offset."""

    def check_calendar(self, fields: WMIFields) -> None:
        """Reject fields that do not name a real date and time.

        Raises:
            InvalidDateTimeComponentError: Naming the first bad field.
        """
        _check_range("year", fields.year, self.min_year, self.max_year)
        _check_range("month", fields.month, 1, 12)
        last_day = calendar.monthrange(fields.year, fields.month)[1]
        _check_range("day", fields.day, 1, last_day)
        _check_range("hour", fields.hour, 0, 23)
        _check_range("minute", fields.minute, 0, 59)
        _check_range("second", fields.second, 0, 59)

    def build(self, fields: WMIFields) -> datetime:
        """Combine parsed fields into an offset-aware instant.

        Raises:
            InvalidDateTimeComponentError: If the fields fail the calendar check.
            InternalFormattingError: If the library rejects values that
                already passed validation.
        """
        self.check_calendar(fields)
        microsecond = normalize_subsecond(fields.subsecond)
        try:
            offset = self.make_offset(fields.offset_seconds)
            naive = self.make_naive(
                fields.year,
                fields.month,
                fields.day,
                fields.hour,
                fields.minute,
                fields.second,
                microsecond,
            )
            return naive.replace(tzinfo=offset)
        except WMIDateTimeError:
            raise
        except (ValueError, OverflowError) as exc:
            raise InternalFormattingError(
                f"{self.name} backend rejected validated fields {fields}: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
