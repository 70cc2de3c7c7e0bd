from __future__ import annotations

import threading
from datetime import date, datetime, time

import pytest
import pytz

from src.hr_attendance.hr_attendance.attendance.model import AttendanceEntry
from src.hr_attendance.hr_attendance.attendance.service import AttendanceService
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus
from src.hr_attendance.hr_attendance.core.exceptions import (
    AlreadyPunchedInError,
    EmployeeNotFoundError,
    NoOpenPunchInError,
    OutOfWindowError,
    ValidationError,
)

from tests.fakes import InMemoryAttendance

TUESDAY = date(2025, 9, 2)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(TUESDAY, time(hour, minute))


@pytest.fixture
def svc(attendance_repo, employees, events):
    return AttendanceService(attendance_repo, employees, events)


@pytest.mark.parametrize(
    "hour,minute,allowed",
    [(8, 59, False), (9, 0, True), (10, 59, True), (11, 0, False)],
)
def test_punch_in_window_boundaries(svc, attendance_repo, hour, minute, allowed):
    if allowed:
        entry = svc.punch_in(1, now=at(hour, minute))
        assert entry.check_in == time(hour, minute)
        assert entry.check_out is None
        assert entry.status == AttendanceStatus.PRESENT
        assert attendance_repo.get_for_employee_and_date(1, TUESDAY) == entry
    else:
        with pytest.raises(OutOfWindowError):
            svc.punch_in(1, now=at(hour, minute))
        assert attendance_repo.get_for_employee_and_date(1, TUESDAY) is None


def test_punch_in_uses_organisation_time_zone(svc):
    # 04:00 UTC is 09:30 in Asia/Kolkata.
    now = pytz.utc.localize(datetime(2025, 9, 2, 4, 0))
    entry = svc.punch_in(1, now=now)
    assert entry.check_in == time(9, 30)
    assert entry.work_date == TUESDAY


def test_second_punch_in_same_day_fails(svc, attendance_repo):
    svc.punch_in(1, now=at(9, 5))
    with pytest.raises(AlreadyPunchedInError):
        svc.punch_in(1, now=at(9, 45))
    assert attendance_repo.count_for(1, TUESDAY) == 1


def test_punch_in_after_manual_entry_fails(svc):
    svc.mark_manual(1, TUESDAY, "Sick Leave")
    with pytest.raises(AlreadyPunchedInError):
        svc.punch_in(1, now=at(9, 30))


def test_punch_in_unknown_employee(svc):
    with pytest.raises(EmployeeNotFoundError):
        svc.punch_in(99, now=at(9, 30))


class StaleReadAttendance(InMemoryAttendance):
    """Every read misses, as if another request wrote in between."""

    def get_for_employee_and_date(self, employee_id, work_date):
        return None


def test_punch_in_losing_a_race_reports_already_punched_in(employees, events):
    repo = StaleReadAttendance([1])
    svc = AttendanceService(repo, employees, events)

    svc.punch_in(1, now=at(9, 1))
    with pytest.raises(AlreadyPunchedInError):
        svc.punch_in(1, now=at(9, 1))
    assert repo.count_for(1, TUESDAY) == 1


def test_concurrent_punch_ins_create_one_entry(svc, attendance_repo):
    barrier = threading.Barrier(8)
    outcomes: list[str] = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            svc.punch_in(2, now=at(9, 15))
            result = "ok"
        except AlreadyPunchedInError:
            result = "dup"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("dup") == 7
    assert attendance_repo.count_for(2, TUESDAY) == 1


def test_punch_out_without_punch_in_fails(svc):
    with pytest.raises(NoOpenPunchInError):
        svc.punch_out(1, now=at(18, 0))


def test_punch_out_sets_check_out_outside_window(svc, attendance_repo):
    svc.punch_in(1, now=at(9, 10))
    entry = svc.punch_out(1, now=at(18, 30))

    assert entry.check_out == time(18, 30)
    stored = attendance_repo.get_for_employee_and_date(1, TUESDAY)
    assert stored.check_in == time(9, 10)
    assert stored.check_out == time(18, 30)
    assert stored.status == AttendanceStatus.PRESENT


def test_second_punch_out_fails(svc):
    svc.punch_in(1, now=at(9, 10))
    svc.punch_out(1, now=at(17, 0))
    with pytest.raises(NoOpenPunchInError, match="Already punched out for today"):
        svc.punch_out(1, now=at(18, 0))


def test_today_entry(svc):
    assert svc.today_entry(1, today=TUESDAY) is None

    svc.punch_in(1, now=at(9, 10))
    entry = svc.today_entry(1, today=TUESDAY)
    assert entry.check_in == time(9, 10)
    assert entry.derived_status() == AttendanceStatus.PUNCHED_IN


def test_today_entry_unknown_employee(svc):
    with pytest.raises(EmployeeNotFoundError):
        svc.today_entry(99, today=TUESDAY)


def test_punch_out_on_swept_entry_fails(svc, attendance_repo):
    attendance_repo.add(
        AttendanceEntry(employee_id=1, work_date=TUESDAY, check_in=None, check_out=None, status=AttendanceStatus.ABSENT)
    )
    with pytest.raises(NoOpenPunchInError):
        svc.punch_out(1, now=at(17, 0))


def test_punch_events_are_published(svc, events):
    svc.punch_in(3, now=at(9, 10))
    svc.punch_out(3, now=at(17, 45))

    changed = events.named("attendance-changed")
    assert [p["status"] for p in changed] == ["Punched In", "Present"]
    assert changed[0]["check_out"] == "--"
    assert changed[1]["check_out"] == "17:45:00"
    assert changed[0]["employee_name"] == "Employee 3"


def test_mark_manual_overwrites_and_clears_times(svc, attendance_repo):
    svc.punch_in(1, now=at(9, 10))
    entry = svc.mark_manual(1, TUESDAY, "Half Day")

    assert entry.check_in is None and entry.check_out is None
    stored = attendance_repo.get_for_employee_and_date(1, TUESDAY)
    assert stored.status == AttendanceStatus.HALF_DAY
    assert stored.check_in is None
    assert attendance_repo.count_for(1, TUESDAY) == 1


def test_mark_manual_creates_entry_for_any_date(svc, attendance_repo):
    svc.mark_manual(4, date(2025, 8, 15), AttendanceStatus.PAID_LEAVE)
    assert attendance_repo.get_for_employee_and_date(4, date(2025, 8, 15)).status == AttendanceStatus.PAID_LEAVE


@pytest.mark.parametrize("status", ["Not Punched In", "Punched In", "Holiday"])
def test_mark_manual_rejects_non_storable_status(svc, status):
    with pytest.raises(ValidationError):
        svc.mark_manual(1, TUESDAY, status)


def test_history_is_newest_first(svc):
    svc.mark_manual(1, date(2025, 9, 1), "Present")
    svc.mark_manual(1, date(2025, 8, 30), "Absent")
    svc.punch_in(1, now=at(9, 20))

    assert [e.work_date for e in svc.history(1)] == [TUESDAY, date(2025, 9, 1), date(2025, 8, 30)]


def test_invalid_window_configuration(attendance_repo, employees):
    with pytest.raises(ValueError):
        AttendanceService(attendance_repo, employees, punch_in_start_hour=11, punch_in_end_hour=9)
