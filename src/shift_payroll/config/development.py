import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))

# Country code understood by the holidays package
HOLIDAY_COUNTRY = os.getenv("HOLIDAY_COUNTRY", "JP")

# Read 22:00-05:00 style shifts as ending the next day
ALLOW_OVERNIGHT_SHIFTS = bool(int(os.getenv("ALLOW_OVERNIGHT_SHIFTS", "1")))

# If enabled, schema.sql is applied when the container is built (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
