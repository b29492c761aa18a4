"""
Standard-library backend: ``datetime.datetime`` + ``datetime.timezone``.

Covers the full CIM year range (0001-9999), including the 1601 epoch
that Windows uses for "never" timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

from wmi_datetime.backends.base import DateTimeBackend
from wmi_datetime.exceptions import InternalFormattingError


class StdlibBackend(DateTimeBackend):
    """Backend built on the standard ``datetime`` module."""

    name = "stdlib"

    def make_offset(self, seconds: int) -> tzinfo:
        return timezone(timedelta(seconds=seconds))

    def make_naive(self, year, month, day, hour, minute, second, microsecond) -> datetime:
        return datetime(year, month, day, hour, minute, second, microsecond)

    def format_rfc3339(self, value: datetime) -> str:
        offset = value.utcoffset()
        if offset is None:
            raise InternalFormattingError(f"cannot format naive datetime {value!r}")

        # Written out by hand: strftime("%Y") does not zero-pad years < 1000
        total_minutes = int(offset.total_seconds()) // 60
        sign = "-" if total_minutes < 0 else "+"
        offset_hours, offset_minutes = divmod(abs(total_minutes), 60)
        return (
            f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
            f".{value.microsecond:06d}"
            f"{sign}{offset_hours:02d}:{offset_minutes:02d}"
        )
