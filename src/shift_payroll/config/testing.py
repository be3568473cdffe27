import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_test"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False

HOLIDAY_COUNTRY = "JP"
ALLOW_OVERNIGHT_SHIFTS = True

AUTO_INIT_DB = False
