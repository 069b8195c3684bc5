"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ADMIN_EMAIL = "admin@company.com"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_NAME = "Admin User"
DEFAULT_ADMIN_DESIGNATION = "System Administrator"
DEFAULT_ADMIN_DEPARTMENT = "Management"
DEFAULT_ADMIN_JOINING_DATE = "2024-01-01"

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
LOGIN_FAILED_PREFIX = "Login failed"
UNKNOWN_LABEL = "Unknown"
ALL_DEPARTMENTS = "All Departments"

MIN_PASSWORD_LENGTH = 6
MIN_RATING = 0.0
MAX_RATING = 5.0

TOP_PERFORMERS_LIMIT = 3
RECENT_ACTIVITY_LIMIT = 5
RECENT_PER_SOURCE = 2
DEFAULT_HISTORY_LIMIT = 10

DEFAULT_CHECK_IN = "09:00 AM"
DEFAULT_CHECK_OUT = "06:00 PM"
