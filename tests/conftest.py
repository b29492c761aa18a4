"""
Shared test fixtures for wmi-datetime tests.

Sample rows are shaped like a ``Win32_Process`` query exported to CSV:
CreationDate holds raw CIM datetimes, including the blank cells WMI
writes for system processes.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample data -- edit here if the fixture table changes
# ---------------------------------------------------------------------------
WIN32_PROCESS_CSV = """\
Name,ProcessId,CreationDate
System Idle Process,0,
svchost.exe,1044,20190113200517.500000-180
explorer.exe,5120,20190113200517.500000+060
"""


@pytest.fixture
def win32_process_csv(tmp_path: Path) -> Path:
    """Write the sample Win32_Process table to a temporary CSV file."""
    path = tmp_path / "win32_process.csv"
    path.write_text(WIN32_PROCESS_CSV, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (CSV -> convert -> export)",
    )
