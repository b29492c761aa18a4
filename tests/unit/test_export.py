"""
Unit tests for the exporter (wmi_datetime.export).

Tests CSV and Parquet export, directory creation, and error handling
using pytest's tmp_path fixture.
"""

from __future__ import annotations

import pandas as pd
import pytest

from wmi_datetime.exceptions import ExportError
from wmi_datetime.export import export_table
from wmi_datetime.transforms import parse_wmi_columns


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_table() -> pd.DataFrame:
    """Build a small converted Win32_Process table."""
    df = pd.DataFrame({
        "Name": ["svchost.exe", "explorer.exe"],
        "ProcessId": [1044, 5120],
        "CreationDate": ["20190113200517.500000-180", ""],
    })
    return parse_wmi_columns(df, ["CreationDate"])


class TestExportCSV:
    """Tests for CSV export."""

    def test_basic_csv_export(self, tmp_path):
        path = export_table(_make_table(), tmp_path / "proc.csv", output_format="csv")
        assert path == tmp_path / "proc.csv"
        assert path.exists()

    def test_datetimes_written_as_rfc3339(self, tmp_path):
        export_table(_make_table(), tmp_path / "proc.csv", output_format="csv")
        loaded = pd.read_csv(tmp_path / "proc.csv", encoding="utf-8-sig")
        assert list(loaded.columns) == ["Name", "ProcessId", "CreationDate"]
        assert loaded["CreationDate"].iloc[0] == "2019-01-13T23:05:17.000500+00:00"
        assert pd.isna(loaded["CreationDate"].iloc[1])

    def test_creates_parent_dirs(self, tmp_path):
        path = export_table(_make_table(), tmp_path / "a" / "b" / "proc.csv")
        assert path.exists()


class TestExportParquet:
    """Tests for Parquet export."""

    def test_parquet_round_trip_keeps_dtype(self, tmp_path):
        table = _make_table()
        export_table(table, tmp_path / "proc.parquet", output_format="parquet")
        loaded = pd.read_parquet(tmp_path / "proc.parquet")
        assert isinstance(loaded["CreationDate"].dtype, pd.DatetimeTZDtype)
        assert loaded["CreationDate"].iloc[0] == table["CreationDate"].iloc[0]


class TestExportErrors:
    """Tests for error handling."""

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ExportError, match="Unsupported output format"):
            export_table(_make_table(), tmp_path / "proc.xlsx", output_format="xlsx")

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError, match="Failed to write"):
            export_table(_make_table(), blocker / "proc.csv")
