"""Configuration constants for the pical package."""

# Horizon settings
DEFAULT_HORIZON_DAYS = 60

# Timestamp layouts (fixed width, no separators, second precision)
ICAL_DATE_FORMAT = "%Y%m%d"
ICAL_DATETIME_FORMAT = "%Y%m%dT%H%M%S"

# Months (inclusive) that use a seasonal zone's standard offset
DEFAULT_STANDARD_MONTHS = (4, 9)

# Config file settings
DEFAULT_CONFIG_FILES = ["pical.json"]

WEEKDAY_CODES = {"MO": 0, "TU": 1, "WE": 2, "TH": 3, "FR": 4, "SA": 5, "SU": 6}
