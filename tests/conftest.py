from __future__ import annotations

import pytest

from src.hr_attendance.hr_attendance.events.publisher import InMemoryEventPublisher

from tests.fakes import FakeRenderer, InMemoryAttendance, InMemoryEmployees, InMemorySalaries, make_employee


@pytest.fixture
def employees():
    return InMemoryEmployees([make_employee(i) for i in range(1, 6)])


@pytest.fixture
def attendance_repo(employees):
    return InMemoryAttendance(e.employee_id for e in employees.list_all())


@pytest.fixture
def salaries():
    return InMemorySalaries()


@pytest.fixture
def events():
    return InMemoryEventPublisher()


@pytest.fixture
def renderer():
    return FakeRenderer()
