"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_AVATAR = "👤"
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_STATS_LOOKBACK = 1000

WEEK_DAYS = 7
MONTH_DAYS = 30

METRICS_CAPACITY = 1000
METRICS_QUERY_MAX_LEN = 100
METRICS_WINDOW_MS = 300_000
METRICS_RECENT_LIMIT = 50
SLOW_REQUEST_MS = 1000
SLOW_QUERY_MS = 500
