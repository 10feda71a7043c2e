"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Storage sentinel for date-only attendance keys (NULL cannot sit in a primary key).
NO_TIME_SLOT = -1

MAX_IDENTITY_LENGTH = 128
# Largest date key the storage column (INT UNSIGNED) can hold.
MAX_DATE_KEY = 4294967295
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_EVENT_LOG_SIZE = 500
DEFAULT_CALLER_HEADER = "X-Caller-Identity"
