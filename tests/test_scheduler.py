from __future__ import annotations

import threading
from datetime import datetime, timedelta

import pytz

from src.hr_attendance.hr_attendance.scheduler.service import DailyScheduler

IST = pytz.timezone("Asia/Kolkata")


def test_next_run_later_today():
    scheduler = DailyScheduler(lambda: None, hour=11, minute=0, tz_name="Asia/Kolkata")
    due = scheduler.next_run_after(datetime(2025, 9, 2, 10, 59))
    assert due == IST.localize(datetime(2025, 9, 2, 11, 0))


def test_next_run_tomorrow_once_trigger_passed():
    scheduler = DailyScheduler(lambda: None, hour=11, minute=0, tz_name="Asia/Kolkata")
    assert scheduler.next_run_after(datetime(2025, 9, 2, 11, 0)) == IST.localize(datetime(2025, 9, 3, 11, 0))
    assert scheduler.next_run_after(datetime(2025, 9, 2, 23, 30)) == IST.localize(datetime(2025, 9, 3, 11, 0))


def test_next_run_converts_from_other_zones():
    scheduler = DailyScheduler(lambda: None, hour=11, minute=0, tz_name="Asia/Kolkata")
    # 05:00 UTC is 10:30 IST.
    due = scheduler.next_run_after(pytz.utc.localize(datetime(2025, 9, 2, 5, 0)))
    assert due == IST.localize(datetime(2025, 9, 2, 11, 0))


def test_run_once_logs_and_survives_task_errors(caplog):
    def boom():
        raise RuntimeError("db down")

    DailyScheduler(boom, name="absence-sweep").run_once()

    assert "Scheduled task absence-sweep failed" in caplog.text


def test_background_thread_runs_task_and_stops():
    fired = threading.Event()
    scheduler = DailyScheduler(fired.set, name="test-task")
    scheduler.next_run_after = lambda now: now + timedelta(milliseconds=20)

    scheduler.start()
    try:
        assert scheduler.running
        assert fired.wait(timeout=5)
    finally:
        scheduler.stop()

    assert not scheduler.running
