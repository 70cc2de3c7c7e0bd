from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from src.hr_attendance.hr_attendance.attendance import service as attendance_service_module
from src.hr_attendance.hr_attendance.common.datetime_utils import today_local
from src.hr_attendance.hr_attendance.container import Options, build_services
from src.hr_attendance.hr_attendance.main import create_app

from tests.fakes import FakeRenderer, InMemoryAttendance, InMemoryEmployees, InMemorySalaries, make_employee

IST = pytz.timezone("Asia/Kolkata")


@pytest.fixture
def container(events):
    employees = InMemoryEmployees([make_employee(1), make_employee(2, base_salary=0), make_employee(3)])
    return build_services(
        employees_repo=employees,
        attendance_repo=InMemoryAttendance([1, 2, 3]),
        salary_repo=InMemorySalaries(),
        options=Options(punch_in_start_hour=0, punch_in_end_hour=24),
        events=events,
        renderer=FakeRenderer(),
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


def test_punch_in_then_out(client):
    resp = client.post("/api/attendance/1/punch-in")
    assert resp.status_code == 201
    assert resp.get_json()["entry"]["status"] == "Present"

    again = client.post("/api/attendance/1/punch-in")
    assert again.status_code == 409
    assert again.get_json()["message"] == "Already punched in for today"

    out = client.post("/api/attendance/1/punch-out")
    assert out.status_code == 200
    assert out.get_json()["entry"]["check_out"] != "--"


def test_punch_out_without_punch_in(client):
    resp = client.post("/api/attendance/2/punch-out")
    assert resp.status_code == 409
    assert resp.get_json()["message"] == "Cannot punch out without punching in first"


def test_unknown_employee_is_404(client):
    assert client.post("/api/attendance/77/punch-in").status_code == 404


@pytest.fixture
def office_hours_client(monkeypatch, events):
    monkeypatch.setenv("APP_ENV", "testing")
    office = build_services(
        employees_repo=InMemoryEmployees([make_employee(1)]),
        attendance_repo=InMemoryAttendance([1]),
        salary_repo=InMemorySalaries(),
        events=events,
        renderer=FakeRenderer(),
    )
    return create_app(container=office).test_client()


def freeze_clock(monkeypatch, hour, minute):
    fixed = IST.localize(datetime(2025, 9, 2, hour, minute))
    monkeypatch.setattr(attendance_service_module, "now_local", lambda tz_name: fixed)


@pytest.mark.parametrize("hour,minute,status_code", [(8, 59, 400), (9, 0, 201), (10, 59, 201), (11, 0, 400)])
def test_punch_in_window_over_http(monkeypatch, office_hours_client, hour, minute, status_code):
    freeze_clock(monkeypatch, hour, minute)

    resp = office_hours_client.post("/api/attendance/1/punch-in")

    assert resp.status_code == status_code
    if status_code == 400:
        assert resp.get_json()["message"] == "Punch-in is only allowed between 09:00 and 11:00."


def test_punch_out_twice_over_http(monkeypatch, office_hours_client):
    freeze_clock(monkeypatch, 9, 30)
    office_hours_client.post("/api/attendance/1/punch-in")
    freeze_clock(monkeypatch, 18, 0)
    assert office_hours_client.post("/api/attendance/1/punch-out").status_code == 200

    again = office_hours_client.post("/api/attendance/1/punch-out")

    assert again.status_code == 409
    assert again.get_json()["message"] == "Already punched out for today"


def test_my_today(monkeypatch, office_hours_client):
    freeze_clock(monkeypatch, 9, 30)
    before = office_hours_client.get("/api/attendance/1/today").get_json()
    assert before == {"employee_id": 1, "status": "Not Punched In", "entry": None}

    office_hours_client.post("/api/attendance/1/punch-in")
    after = office_hours_client.get("/api/attendance/1/today").get_json()

    assert after["status"] == "Punched In"
    assert after["entry"]["check_in"] == "09:30:00"
    assert office_hours_client.get("/api/attendance/9/today").status_code == 404



def test_today_board_and_manual_override(client):
    client.post("/api/attendance/1/punch-in")
    today = today_local().strftime("%Y-%m-%d")
    resp = client.post("/api/attendance/manual", json={"employee_id": 3, "date": today, "status": "Sick Leave"})
    assert resp.status_code == 200

    board = {row["employee_id"]: row["status"] for row in client.get("/api/attendance/today").get_json()}
    assert board == {1: "Punched In", 2: "Not Punched In", 3: "Sick Leave"}


def test_manual_override_validation(client):
    resp = client.post("/api/attendance/manual", json={"employee_id": 1, "date": "02/09/2025", "status": "Absent"})
    assert resp.status_code == 400
    resp = client.post("/api/attendance/manual", json={"employee_id": 1, "date": "2025-09-02", "status": "Not Punched In"})
    assert resp.status_code == 400


def test_sweep_endpoint_is_idempotent(client):
    first = client.post("/api/attendance/sweep", json={"date": "2025-09-02"}).get_json()
    second = client.post("/api/attendance/sweep", json={"date": "2025-09-02"}).get_json()

    assert first["marked"] == 3 and first["status"] == "Absent"
    assert second["marked"] == 0

    sheet = client.get("/api/attendance/sheet").get_json()
    assert sheet["dates"] == ["2025-09-02"]
    assert all(row["attendance"] == {"2025-09-02": "Absent"} for row in sheet["sheet"])


def test_employee_attendance_history(client):
    client.post("/api/attendance/manual", json={"employee_id": 1, "date": "2025-09-01", "status": "Paid Leave"})
    rows = client.get("/api/employees/1/attendance").get_json()
    assert rows == [{"employee_id": 1, "date": "2025-09-01", "check_in": "--", "check_out": "--", "status": "Paid Leave"}]
    assert len(client.get("/api/attendance").get_json()) == 1


def test_generate_payroll(client, container):
    client.post("/api/attendance/manual", json={"employee_id": 1, "date": "2025-09-01", "status": "Present"})

    resp = client.post("/api/payroll/generate", json={"employee_ids": [1, 2], "month": "September 2025"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert [r["employee_id"] for r in body["generated"]] == [1]
    assert body["generated"][0]["amount"] == 1000
    assert body["skipped"][0]["employee_id"] == 2
    assert len(client.get("/api/employees/1/salary-history").get_json()) == 1
    assert client.get("/api/payroll/history").get_json()[0]["employee_name"] == "Employee 1"


def test_generate_payroll_requires_employees(client):
    resp = client.post("/api/payroll/generate", json={"employee_ids": [], "month": "September 2025"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Please select at least one employee"


@pytest.mark.parametrize(
    "body",
    [
        {"employee_id": "abc", "date": "2025-09-02", "status": "Absent"},
        {"employee_id": None, "date": "2025-09-02", "status": "Absent"},
        {"employee_id": 1, "date": 20250902, "status": "Absent"},
        ["not", "an", "object"],
    ],
)
def test_manual_override_malformed_body_is_400(client, body):
    resp = client.post("/api/attendance/manual", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


@pytest.mark.parametrize(
    "body,message",
    [
        ({"employee_ids": [1], "month": 202509}, "month must be a string"),
        ({"employee_ids": [1], "month": "September ²"}, "Invalid month 'September ²', expected e.g. 'September 2025'"),
        ({"employee_ids": ["x"], "month": "September 2025"}, "employee must be numeric ids"),
        ({"employee_ids": 5, "month": "September 2025"}, "employee must be numeric ids"),
    ],
)
def test_generate_payroll_malformed_body_is_400(client, body, message):
    resp = client.post("/api/payroll/generate", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == message
