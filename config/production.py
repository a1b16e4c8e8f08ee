import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

METRICS_CAPACITY = int(os.getenv("METRICS_CAPACITY", "1000"))
STATS_LOOKBACK = int(os.getenv("STATS_LOOKBACK", "1000"))
CLAMP_NEGATIVE_HOURS = bool(int(os.getenv("CLAMP_NEGATIVE_HOURS", "0")))
