import os

# No credential defaults: a missing value is a configuration error at first use.
DB_CONFIG = {
    "host": os.getenv("DB_HOST"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER"),
    "password": os.getenv("DB_PASSWORD"),
    "database": os.getenv("DB_NAME"),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ROLLOVER_HOUR = int(os.getenv("ROLLOVER_HOUR", "0"))
ROLLOVER_MAX_DAYS_BACK = int(os.getenv("ROLLOVER_MAX_DAYS_BACK", "30"))
ROLLOVER_MAX_DAYS_TO_PROCESS = int(os.getenv("ROLLOVER_MAX_DAYS_TO_PROCESS", "30"))
ROLLOVER_HOLD_ON_FAILED_DAY = bool(int(os.getenv("ROLLOVER_HOLD_ON_FAILED_DAY", "0")))
ROLLOVER_TRIGGER_TOKEN = os.getenv("ROLLOVER_TRIGGER_TOKEN")
