"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_SHIFT_START = "09:00"
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORTS_LIMIT = 10

MIN_PASSWORD_LENGTH = 6
MAX_TASK_TITLE_LENGTH = 200
MAX_TASK_DESCRIPTION_LENGTH = 2000
