"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000

MS_PER_MINUTE = 60 * 1000

DEFAULT_MAX_ACCURACY_METERS = 30
DEFAULT_EARLY_ARRIVAL_MINUTES = 0

SESSION_BUFFER_MINUTES = 10
SESSION_BUFFER_MS = SESSION_BUFFER_MINUTES * MS_PER_MINUTE

DEFAULT_SESSION_TIMEZONE = "Asia/Kolkata"
DEFAULT_SESSION_START_TIME = "00:00"
DEFAULT_SESSION_END_TIME = "23:59"
