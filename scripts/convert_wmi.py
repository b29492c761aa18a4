"""
Convert CIM ("WMI") datetimes to RFC3339.

Usage:
    uv run python scripts/convert_wmi.py 20190113200517.500000-180 ...
    uv run python scripts/convert_wmi.py --csv inputs/win32_process.csv --config wmiconfig.yaml

With positional arguments, prints one RFC3339 line per timestamp and
exits with status 1 if any of them could not be parsed.

With --csv, converts the columns listed in the config file and writes
the result to {output_dir}/{csv stem}.{output_format}.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("convert_wmi")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _convert_values(values: list[str], backend: str) -> int:
    import wmi_datetime

    failed = 0
    for value in values:
        try:
            print(wmi_datetime.WMIDateTime.parse(value, backend).to_rfc3339())
        except wmi_datetime.WMIDateTimeError as exc:
            log.error("%s: %s", value, exc)
            failed += 1
    return 1 if failed else 0


def _convert_csv(csv_path: str, config_path: str) -> int:
    import pandas as pd

    import wmi_datetime

    config = wmi_datetime.load_config(config_path)
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    log.info("Read %s (%d rows)", csv_path, len(df))
    written = wmi_datetime.convert_table(config, df, Path(csv_path).stem)
    log.info("Done: %s", written)
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("values", nargs="*", help="CIM datetime strings")
    parser.add_argument("--csv", help="CSV file of WMI query results")
    parser.add_argument("--config", default="wmiconfig.yaml", help="Config file for --csv")
    parser.add_argument(
        "--backend", default="stdlib", choices=["stdlib", "pandas"],
        help="Backend for positional values",
    )
    args = parser.parse_args(argv)

    if args.csv:
        return _convert_csv(args.csv, args.config)
    if not args.values:
        parser.error("give CIM datetime values or --csv")
    return _convert_values(args.values, args.backend)


if __name__ == "__main__":
    sys.exit(main())
