"""
pandas backend: instants are ``pandas.Timestamp`` objects.

Useful when results go straight into DataFrames. ``Timestamp`` stores
nanoseconds since 1970 in 64 bits, so the representable years are
narrower than the standard library's; the bounds below stay inside
1677-09-21 .. 2262-04-11 for every UTC offset.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

import pandas as pd

from wmi_datetime.backends.base import DateTimeBackend
from wmi_datetime.exceptions import InternalFormattingError, InvalidDateTimeComponentError


class PandasBackend(DateTimeBackend):
    """Backend built on ``pandas.Timestamp``."""

    name = "pandas"
    min_year = 1678
    max_year = 2261

    def make_offset(self, seconds: int) -> tzinfo:
        return timezone(timedelta(seconds=seconds))

    def make_naive(self, year, month, day, hour, minute, second, microsecond) -> datetime:
        try:
            return pd.Timestamp(
                year=year,
                month=month,
                day=day,
                hour=hour,
                minute=minute,
                second=second,
                microsecond=microsecond,
            )
        except pd.errors.OutOfBoundsDatetime as exc:
            raise InvalidDateTimeComponentError(
                "year", f"year {year} is outside the pandas Timestamp range"
            ) from exc

    def format_rfc3339(self, value: datetime) -> str:
        if value.utcoffset() is None:
            raise InternalFormattingError(f"cannot format naive timestamp {value!r}")
        ts = pd.Timestamp(value)
        # Sub-microsecond digits never occur: the parser yields whole microseconds
        return ts.isoformat(timespec="microseconds")
