import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "payroll"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

HOLIDAY_COUNTRY = os.getenv("HOLIDAY_COUNTRY", "JP")
ALLOW_OVERNIGHT_SHIFTS = bool(int(os.getenv("ALLOW_OVERNIGHT_SHIFTS", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
