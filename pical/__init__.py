"""Parse iCal calendars into sorted, recurrence-expanded events."""

from .exceptions import ConfigError, ICalSyntaxError, PicalError, RRuleError
from .models import Calendar, Event, events_on
from .parser import ICalParser, default_horizon, parse_ical
from .timezones import DEFAULT_ZONES, DateTimeResolver, FixedZone, SeasonalZone

__version__ = "0.1.0"

__all__ = [
    "Calendar",
    "ConfigError",
    "DEFAULT_ZONES",
    "DateTimeResolver",
    "Event",
    "FixedZone",
    "ICalParser",
    "ICalSyntaxError",
    "PicalError",
    "RRuleError",
    "SeasonalZone",
    "default_horizon",
    "events_on",
    "parse_ical",
]
