import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "test"),
    "database": os.getenv("DB_NAME", "worklog_test"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ROLLOVER_HOUR = 0
ROLLOVER_MAX_DAYS_BACK = 30
ROLLOVER_MAX_DAYS_TO_PROCESS = 30
ROLLOVER_HOLD_ON_FAILED_DAY = False
ROLLOVER_TRIGGER_TOKEN = None
