"""
Exporter for wmi-datetime.

Writes a converted table to disk as CSV or Parquet.

Why Parquet is supported:
- Preserves the ``datetime64[ns, UTC]`` dtype (no re-parsing on load).
- Columnar compression keeps large WMI inventories small.

CSV is written with ``utf-8-sig`` encoding so that Excel opens it
correctly; datetime columns are written as RFC3339 strings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from wmi_datetime.exceptions import ExportError
from wmi_datetime.transforms import to_rfc3339_series

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def _rfc3339_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Replace timezone-aware datetime columns with RFC3339 strings."""
    df = df.copy()
    for col in df.columns:
        if isinstance(df[col].dtype, pd.DatetimeTZDtype):
            df[col] = to_rfc3339_series(df[col])
    return df


def export_table(
    df: pd.DataFrame,
    path: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
) -> Path:
    """Write a DataFrame to *path* in the given format.

    The parent directory is created if it does not exist.

    Args:
        df: The DataFrame to write.
        path: Full file path (including extension).
        output_format: "csv" or "parquet".

    Returns:
        The path that was written.

    Raises:
        ExportError: If *output_format* is unsupported, or if the write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if output_format == "csv":
            _rfc3339_columns(df).to_csv(path, index=False, encoding="utf-8-sig")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc

    logger.info(
        "Exported table -> %s (%d rows, %d cols)", path.name, len(df), len(df.columns)
    )
    return path
