"""
wmi-datetime: parse CIM ("WMI") datetime strings into offset-aware instants.

Public API surface:

- ``WMIDateTime`` -- immutable value type. ``WMIDateTime.parse(text)``
  parses ``"20190113200517.500000-180"``; ``to_rfc3339()`` gives
  ``"2019-01-13T20:05:17.000500-03:00"``. Usable as a pydantic field type.

- ``decode(value)`` / ``encode(instant)`` -- the single-string contracts
  used by serialization frameworks.

- ``parse_wmi_columns(df, columns)`` -- convert DataFrame columns of CIM
  strings to UTC datetimes.

- ``convert_table(config, df)`` -- convert and export one table
  according to a ``WMIConfig`` (see ``wmiconfig.yaml``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from wmi_datetime.config import WMIConfig, load_config, save_config
from wmi_datetime.exceptions import (
    InternalFormattingError,
    InvalidDateTimeComponentError,
    InvalidOffsetError,
    MalformedInputError,
    TypeMismatchError,
    WMIDateTimeError,
)
from wmi_datetime.export import export_table
from wmi_datetime.instant import WMIDateTime, decode, encode
from wmi_datetime.transforms import parse_wmi_columns, to_rfc3339_series

__all__ = [
    "WMIDateTime",
    "decode",
    "encode",
    "parse_wmi_columns",
    "to_rfc3339_series",
    "convert_table",
    "WMIConfig",
    "load_config",
    "save_config",
    "WMIDateTimeError",
    "MalformedInputError",
    "InvalidOffsetError",
    "InvalidDateTimeComponentError",
    "TypeMismatchError",
    "InternalFormattingError",
]

logger = logging.getLogger(__name__)


def convert_table(config: WMIConfig, df: pd.DataFrame, name: str) -> Path:
    """Convert the configured columns of *df* and export the result.

    Orchestration:
      1. ``parse_wmi_columns()`` with the configured columns, error
         policy and backend.
      2. ``export_table()`` to ``{output_dir}/{name}.{output_format}``.

    Args:
        config: Loaded ``WMIConfig``.
        df: Table of WMI query results (one row per instance).
        name: Output file stem, e.g. ``"win32_process"``.

    Returns:
        Path of the written file.

    Raises:
        ParsingError: If a column is missing or a cell is invalid
            under ``errors: raise``.
        ExportError: If the output cannot be written.
    """
    logger.info(
        "convert_table() -- name=%s, columns=%s, backend=%s",
        name, config.columns.names, config.backend,
    )
    converted = parse_wmi_columns(
        df,
        config.columns.names,
        errors=config.columns.errors,
        backend=config.backend,
    )
    fmt = config.output.output_format
    path = Path(config.output.output_dir) / f"{name}.{fmt}"
    return export_table(converted, path, output_format=fmt)
