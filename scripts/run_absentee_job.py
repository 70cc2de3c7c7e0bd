"""Mark absentees without waiting for the scheduler.

Usage: python scripts/run_absentee_job.py [--date YYYY-MM-DD]
Safe to run repeatedly for the same date.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_attendance.hr_attendance.common.datetime_utils import parse_iso_date
from src.hr_attendance.hr_attendance.container import Options, build_container
from src.hr_attendance.hr_attendance.main import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Back-fill attendance for employees who did not punch in.")
    parser.add_argument("--date", help="date to sweep (YYYY-MM-DD); defaults to today in the organisation time zone")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), options=Options.from_settings(settings))
    result = container.run_daily_sweep(parse_iso_date(args.date) if args.date else None)
    print(f"OK: {result.marked_count} employees marked {result.status.value} for {result.work_date}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
