"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NO_TIME = "--"

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_PUNCH_IN_START_HOUR = 9
DEFAULT_PUNCH_IN_END_HOUR = 11
DEFAULT_SWEEP_HOUR = 11
DEFAULT_SWEEP_MINUTE = 0
DEFAULT_COMPANY_NAME = "Dash Media Solution"

EVENT_ATTENDANCE_CHANGED = "attendance-changed"
EVENT_ABSENTEES_MARKED = "absentees-marked"
EVENT_SALARY_GENERATED = "salary-generated"
