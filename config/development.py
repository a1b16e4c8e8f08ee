import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

METRICS_CAPACITY = int(os.getenv("METRICS_CAPACITY", "1000"))
STATS_LOOKBACK = int(os.getenv("STATS_LOOKBACK", "1000"))
# 1 = negative (out < in) durations count as 0 hours in averages
CLAMP_NEGATIVE_HOURS = bool(int(os.getenv("CLAMP_NEGATIVE_HOURS", "0")))
