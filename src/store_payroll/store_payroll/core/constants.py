"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIMEZONE = "Asia/Tokyo"

DEFAULT_OVERTIME_THRESHOLD_HOURS = 8.0
DEFAULT_EXPECTED_START_HOUR = 9
DEFAULT_EXPECTED_END_HOUR = 18

DEFAULT_NIGHT_START_HOUR = 22
DEFAULT_NIGHT_END_HOUR = 5
DEFAULT_ROUNDING_MINUTES = 15

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_SHIFT_END = time(18, 0)
DEFAULT_SHIFT_BREAK_MINUTES = 60

DEFAULT_WEEKLY_STATS_DAYS = 7
