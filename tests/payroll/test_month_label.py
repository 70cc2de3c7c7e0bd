import pytest

from src.hr_attendance.hr_attendance.common.datetime_utils import days_in_month, parse_month_label
from src.hr_attendance.hr_attendance.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "label,expected",
    [("September 2025", (2025, 9)), ("february 2024", (2024, 2)), ("Dec 2023", (2023, 12))],
)
def test_parse_month_label(label, expected):
    assert parse_month_label(label) == expected


@pytest.mark.parametrize(
    "label", ["", "2025-09", "Septembre 2025", "September", "September twenty", "September ²", None, 202509]
)
def test_parse_month_label_rejects_garbage(label):
    with pytest.raises(ValidationError):
        parse_month_label(label)


def test_days_in_month():
    assert days_in_month(2025, 9) == 30
    assert days_in_month(2025, 8) == 31
    assert days_in_month(2023, 2) == 28
