import logging
import pytest
from datetime import datetime, timedelta, timezone
from pical.log import PICAL_MODULES


AEST = timezone(timedelta(hours=10))


@pytest.fixture(autouse=True)
def restore_log_levels():
    """Undo logger levels set by configure_logging() so caplog sees everything."""
    names = [""] + PICAL_MODULES
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def aest():
    return AEST


@pytest.fixture
def sample_ics_simple():
    return """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test//Test//EN
BEGIN:VEVENT
UID:test-event-1@example.com
DTSTART:20250115T140000Z
DTEND:20250115T150000Z
SUMMARY:Team Meeting
LOCATION:Conference Room A
DESCRIPTION:Weekly team sync
END:VEVENT
END:VCALENDAR"""


@pytest.fixture
def sample_ics_weekly():
    return """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test//Test//EN
BEGIN:VEVENT
UID:swim-1@example.com
DTSTART;TZID=Australia/Brisbane:20240113T083000
DTEND;TZID=Australia/Brisbane:20240113T093000
RRULE:FREQ=WEEKLY;BYDAY=SA;UNTIL=20240119T135959Z
SUMMARY:Swimming
END:VEVENT
BEGIN:VEVENT
UID:swim-2@example.com
DTSTART;TZID=Australia/Brisbane:20240120T083000
DTEND;TZID=Australia/Brisbane:20240120T093000
RRULE:FREQ=WEEKLY;BYDAY=SA
SUMMARY:Swimming
END:VEVENT
END:VCALENDAR"""


@pytest.fixture
def sample_ics_recurring():
    return """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test//Test//EN
BEGIN:VEVENT
UID:recurring-event@example.com
DTSTART:20250113T000000Z
DTEND:20250113T010000Z
SUMMARY:Daily Standup
RRULE:FREQ=DAILY;UNTIL=20250117T000000Z
END:VEVENT
END:VCALENDAR"""


@pytest.fixture
def sample_ics_mixed():
    return """BEGIN:VCALENDAR
VERSION:2.0
BEGIN:VTIMEZONE
TZID:Australia/Sydney
BEGIN:STANDARD
DTSTART:19700405T030000
TZOFFSETFROM:+1100
TZOFFSETTO:+1000
END:STANDARD
END:VTIMEZONE
BEGIN:VEVENT
DTSTART;TZID=Australia/Sydney:20240110T120000
DTEND;TZID=Australia/Sydney:20240110T130000
SUMMARY:Lunch
BEGIN:VALARM
ACTION:DISPLAY
SUMMARY:Alarm text
TRIGGER:-PT15M
END:VALARM
END:VEVENT
BEGIN:VEVENT
DTSTART;TZID=Europe/Paris:20240110T090000
DTEND;TZID=Europe/Paris:20240110T100000
SUMMARY:Paris call
END:VEVENT
BEGIN:VEVENT
DTSTART;VALUE=DATE:20240108
DTEND;VALUE=DATE:20240109
SUMMARY:Holiday
END:VEVENT
BEGIN:VEVENT
DTSTART:20240109T000000Z
SUMMARY:No end
END:VEVENT
END:VCALENDAR"""
