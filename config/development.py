import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Organisation clock: punch window, sweep trigger and "today" all use it.
ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "Asia/Kolkata")
PUNCH_IN_START_HOUR = int(os.getenv("PUNCH_IN_START_HOUR", "9"))
PUNCH_IN_END_HOUR = int(os.getenv("PUNCH_IN_END_HOUR", "11"))
SWEEP_HOUR = int(os.getenv("SWEEP_HOUR", "11"))
SWEEP_MINUTE = int(os.getenv("SWEEP_MINUTE", "0"))
ENABLE_SCHEDULER = bool(int(os.getenv("ENABLE_SCHEDULER", "1")))

SLIP_DIR = os.getenv("SLIP_DIR", "var/salary-slips")
COMPANY_NAME = os.getenv("COMPANY_NAME", "Dash Media Solution")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
