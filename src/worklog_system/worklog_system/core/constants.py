"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date, timedelta

# Sentinel for "never rolled over".
EPOCH_SENTINEL = date(1970, 1, 1)

# Fixed civil offset (IST, +05:30), independent of the server timezone.
CIVIL_UTC_OFFSET = timedelta(hours=5, minutes=30)

DEFAULT_ROLLOVER_HOUR = 0
DEFAULT_MAX_DAYS_BACK = 30
DEFAULT_MAX_DAYS_TO_PROCESS = 30
