"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_HOURS = 24
DEFAULT_DASHBOARD_LIMIT = 5
MAX_LIST_LIMIT = 100

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
MIN_FULL_NAME_LENGTH = 3

NET_SALARY_TOLERANCE = 1
UNKNOWN_LABEL = "Unknown"

DEFAULT_GRACE_MINUTES = 5
