"""
Configuration models and YAML I/O for wmi-datetime.

This module defines the Pydantic models that map 1:1 to wmiconfig.yaml,
plus helpers for loading and saving it.

Key models:
- WMIConfig: Top-level config (backend + columns + output).
- ColumnsConfig: Which DataFrame columns hold CIM datetimes and how to
  treat invalid cells.
- OutputConfig: Output directory and file format for converted tables.

Key functions:
- load_config(path) -> WMIConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Why Pydantic + YAML:
- Pydantic gives strict validation and clear error messages.
- YAML is human-editable (column lists differ per WMI class exported).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from wmi_datetime.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class ColumnsConfig(BaseModel):
    """Columns to convert from CIM datetime strings."""

    names: list[str] = Field(
        default_factory=list,
        description="Column names holding CIM datetimes (e.g., 'InstallDate')",
    )
    errors: Literal["raise", "coerce"] = Field(
        "raise",
        description="'raise' stops on the first invalid cell; 'coerce' turns it into NaT",
    )

    @model_validator(mode="after")
    def _check_unique_names(self) -> ColumnsConfig:
        """Validate that no column is listed twice."""
        duplicates = sorted({n for n in self.names if self.names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate column names: {duplicates}")
        return self


class OutputConfig(BaseModel):
    """Output settings."""

    output_dir: str = Field("outputs/", description="Directory for output files")
    output_format: Literal["csv", "parquet"] = Field("csv", description="Output format")


class WMIConfig(BaseModel):
    """Top-level configuration for wmi-datetime.

    Maps 1:1 to wmiconfig.yaml.
    """

    backend: Literal["stdlib", "pandas"] = Field(
        "stdlib", description="Calendar library used to build instants"
    )
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: str | Path) -> WMIConfig:
    """Load and validate wmiconfig.yaml into a WMIConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return WMIConfig.model_validate(raw)


def save_config(config: WMIConfig, path: str | Path) -> None:
    """Serialize a WMIConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# wmi-datetime configuration\n")
        f.write("# List the CIM datetime columns to convert and pick an output format.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
