import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ORG_TIMEZONE = "Asia/Kolkata"
PUNCH_IN_START_HOUR = 9
PUNCH_IN_END_HOUR = 11
SWEEP_HOUR = 11
SWEEP_MINUTE = 0
ENABLE_SCHEDULER = False

SLIP_DIR = os.getenv("SLIP_DIR", "var/test-salary-slips")
COMPANY_NAME = "Dash Media Solution"

AUTO_INIT_DB = False
