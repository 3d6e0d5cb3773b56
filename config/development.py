import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worklog_db"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
# Human-readable console output while developing
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Civil hour (+05:30) during which the scheduled trigger is allowed to run
ROLLOVER_HOUR = int(os.getenv("ROLLOVER_HOUR", "0"))
ROLLOVER_MAX_DAYS_BACK = int(os.getenv("ROLLOVER_MAX_DAYS_BACK", "30"))
ROLLOVER_MAX_DAYS_TO_PROCESS = int(os.getenv("ROLLOVER_MAX_DAYS_TO_PROCESS", "30"))
ROLLOVER_HOLD_ON_FAILED_DAY = bool(int(os.getenv("ROLLOVER_HOLD_ON_FAILED_DAY", "0")))
ROLLOVER_TRIGGER_TOKEN = os.getenv("ROLLOVER_TRIGGER_TOKEN")
