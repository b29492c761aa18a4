"""
Integration tests: CSV of WMI query results -> convert -> export.

Drives the public ``convert_table()`` entry point and the
``scripts/convert_wmi.py`` command line.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pandas as pd
import pytest

import wmi_datetime
from wmi_datetime.config import ColumnsConfig, OutputConfig, WMIConfig, save_config
from wmi_datetime.exceptions import ParsingError

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "convert_wmi.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("convert_wmi", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _read(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")


def _config(tmp_path: Path, **output) -> WMIConfig:
    return WMIConfig(
        columns=ColumnsConfig(names=["CreationDate"]),
        output=OutputConfig(output_dir=str(tmp_path / "out"), **output),
    )


@pytest.mark.integration
class TestConvertTable:
    """Tests for wmi_datetime.convert_table()."""

    def test_csv_output(self, tmp_path, win32_process_csv):
        written = wmi_datetime.convert_table(
            _config(tmp_path), _read(win32_process_csv), "win32_process"
        )
        assert written == tmp_path / "out" / "win32_process.csv"

        loaded = _read(written)
        assert loaded["CreationDate"].tolist() == [
            "",
            "2019-01-13T23:05:17.000500+00:00",
            "2019-01-13T19:05:17.000500+00:00",
        ]
        assert loaded["ProcessId"].tolist() == ["0", "1044", "5120"]

    def test_parquet_output(self, tmp_path, win32_process_csv):
        written = wmi_datetime.convert_table(
            _config(tmp_path, output_format="parquet"),
            _read(win32_process_csv),
            "win32_process",
        )
        loaded = pd.read_parquet(written)
        assert loaded["CreationDate"].isna().tolist() == [True, False, False]
        assert loaded["CreationDate"].iloc[1] == pd.Timestamp(
            "2019-01-13 23:05:17.000500", tz="UTC"
        )

    def test_pandas_backend(self, tmp_path, win32_process_csv):
        cfg = _config(tmp_path)
        cfg.backend = "pandas"
        written = wmi_datetime.convert_table(cfg, _read(win32_process_csv), "p")
        assert _read(written)["CreationDate"].iloc[2] == "2019-01-13T19:05:17.000500+00:00"

    def test_invalid_cell_raises(self, tmp_path):
        df = pd.DataFrame({"Name": ["a"], "CreationDate": ["not a date at all!!"]})
        with pytest.raises(ParsingError, match="row 0"):
            wmi_datetime.convert_table(_config(tmp_path), df, "bad")
        assert not (tmp_path / "out" / "bad.csv").exists()


@pytest.mark.integration
class TestConvertScript:
    """Tests for scripts/convert_wmi.py."""

    def test_values(self, capsys):
        status = _load_script().main(
            ["20190113200517.500000-180", "20190113200517.500000+060"]
        )
        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "2019-01-13T20:05:17.000500-03:00",
            "2019-01-13T20:05:17.000500+01:00",
        ]

    def test_bad_value_sets_exit_status(self, capsys):
        status = _load_script().main(["20190113200517", "20190113200517.500000+060"])
        assert status == 1
        assert capsys.readouterr().out.splitlines() == ["2019-01-13T20:05:17.000500+01:00"]

    def test_csv(self, tmp_path, win32_process_csv):
        config_path = tmp_path / "wmiconfig.yaml"
        save_config(_config(tmp_path), config_path)
        status = _load_script().main(
            ["--csv", str(win32_process_csv), "--config", str(config_path)]
        )
        assert status == 0
        assert (tmp_path / "out" / "win32_process.csv").exists()
