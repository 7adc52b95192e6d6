"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_COOLDOWN_MS = 3000
LOG_LIST_LIMIT = 500

# Daily sweep fires shortly after midnight local time (cron, not a fixed interval).
DAILY_RESET_AT = time(0, 0, 5)

# A sweep closes the day that was current this many hours before it fired.
DAILY_RESET_LOOKBACK_HOURS = 12

MIN_PASSWORD_LENGTH = 6

USERS_COLLECTION = "users"
LOGS_COLLECTION = "logs"
