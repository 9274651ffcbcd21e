"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAYS_IN_WEEK = 7

# Reopen propagation: scan this many days past the reopen date ...
REOPEN_SCAN_DAYS = 14
# ... but only materialize missing entries up to this many days past it.
REOPEN_CREATE_DAYS = 7

# Catch-up rollover never walks further back than this.
CATCH_UP_MAX_DAYS = 30
ROLLOVER_EPOCH = "1970-01-01"

DEFAULT_LATE_THRESHOLD = "10:00"
MAX_RANGE_DAYS = 366
MINUTES_PER_DAY = 24 * 60
