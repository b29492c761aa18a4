"""
DataFrame transforms for CIM datetime columns.

WMI query results exported to CSV (e.g., ``Win32_Process`` with
``CreationDate`` or ``Win32_OperatingSystem`` with ``InstallDate``)
carry timestamps as raw CIM strings. These helpers convert whole
columns at once:

- parse_wmi_columns(): CIM strings -> ``datetime64[ns, UTC]``.
- to_rfc3339_series(): UTC datetimes -> RFC3339 strings.

Missing cells (``None``, ``NaN``, empty or whitespace-only strings)
become ``NaT`` without counting as errors.

Instants are normalized to UTC because a pandas datetime column holds a
single timezone, while each CIM string carries its own offset.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Literal

import pandas as pd

from wmi_datetime.backends import DateTimeBackend
from wmi_datetime.exceptions import ParsingError, WMIDateTimeError
from wmi_datetime.instant import WMIDateTime, decode

logger = logging.getLogger(__name__)

# Inside the datetime64[ns] range for any input offset
_MIN_UTC = datetime(1677, 9, 22, tzinfo=timezone.utc)
_MAX_UTC = datetime(2262, 4, 11, tzinfo=timezone.utc)


def _is_missing(cell: object) -> bool:
    if isinstance(cell, str):
        return not cell.strip()
    return cell is None or (pd.api.types.is_scalar(cell) and pd.isna(cell))


def _convert_cell(cell: object, backend: str | DateTimeBackend | None) -> datetime:
    """Decode one cell and return its UTC instant.

    Raises:
        WMIDateTimeError: If the cell is not a valid CIM datetime or
            lies outside the datetime64[ns] range.
    """
    instant = decode(cell, backend)
    utc = instant.value.astimezone(timezone.utc)
    if not _MIN_UTC <= utc <= _MAX_UTC:
        raise ParsingError(
            f"{instant.to_rfc3339()} is outside the datetime64[ns] range"
        )
    return utc


def parse_wmi_columns(
    df: pd.DataFrame,
    columns: list[str],
    errors: Literal["raise", "coerce"] = "raise",
    backend: str | DateTimeBackend | None = None,
) -> pd.DataFrame:
    """Convert columns of CIM datetime strings to UTC datetimes.

    Args:
        df: Input DataFrame (typically read from CSV with ``dtype=str``).
        columns: Column names to convert. Other columns are left as-is.
        errors: ``"raise"`` to stop at the first invalid cell, or
            ``"coerce"`` to turn invalid cells into ``NaT``.
        backend: Backend name or instance used to build instants.

    Returns:
        A copy of *df* with each listed column as ``datetime64[ns, UTC]``.

    Raises:
        ParsingError: If a column is missing, or (with ``errors="raise"``)
            a cell is not a valid CIM datetime.
    """
    if errors not in ("raise", "coerce"):
        raise ValueError(f"errors must be 'raise' or 'coerce', got {errors!r}")

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ParsingError(
            f"Columns not found: {missing}. Available columns: {list(df.columns)}"
        )

    df = df.copy()
    for col in columns:
        values: list[datetime | None] = []
        n_coerced = 0
        for row, cell in zip(df.index, df[col]):
            if _is_missing(cell):
                values.append(None)
                continue
            try:
                values.append(_convert_cell(cell, backend))
            except WMIDateTimeError as exc:
                if errors == "raise":
                    raise ParsingError(
                        f"Column '{col}', row {row}: {exc}"
                    ) from exc
                values.append(None)
                n_coerced += 1

        df[col] = pd.to_datetime(pd.Series(values, index=df.index, dtype=object), utc=True)

        if n_coerced:
            logger.warning(
                "Column '%s': %d invalid CIM datetime(s) coerced to NaT", col, n_coerced
            )
        logger.info("Converted column '%s' (%d rows)", col, len(df))

    return df


def to_rfc3339_series(series: pd.Series) -> pd.Series:
    """Format a timezone-aware datetime column as RFC3339 strings.

    ``NaT`` becomes ``None``. Offsets follow the column's timezone
    (``+00:00`` for columns produced by ``parse_wmi_columns()``).
    """

    def _format(ts: pd.Timestamp) -> str | None:
        if pd.isna(ts):
            return None
        return WMIDateTime(ts.to_pydatetime()).to_rfc3339()

    return series.map(_format).astype(object)
