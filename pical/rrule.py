"""Parsing of the supported subset of iCal recurrence rules."""

import enum
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .constants import WEEKDAY_CODES
from .exceptions import RRuleError
from .timezones import parse_date, parse_offset_datetime

logger = logging.getLogger(__name__)

_BYDAY_RE = re.compile(r"^([+-]?\d)?(MO|TU|WE|TH|FR|SA|SU)$")
_INT_RE = re.compile(r"^[+-]?\d+$")


class Frequency(enum.Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class WeekdaySelector:
    """A BYDAY value such as `2TU` (second Tuesday) or `-1FR` (last Friday)."""

    weekday: int
    ordinal: int = 0

    @classmethod
    def parse(cls, value: str) -> "WeekdaySelector":
        match = _BYDAY_RE.match(value.strip().upper())
        if not match:
            raise RRuleError(f"Invalid BYDAY value: {value!r}")
        ordinal = int(match[1]) if match[1] else 0
        return cls(WEEKDAY_CODES[match[2]], ordinal)


def _parse_int(key: str, value: str) -> int:
    if not _INT_RE.match(value.strip()):
        raise RRuleError(f"Invalid {key} value: {value!r}")
    return int(value)


def _parse_until(value: str, target_offset: timezone) -> datetime:
    value = value.strip()
    try:
        return parse_offset_datetime(value).astimezone(target_offset)
    except ValueError:
        pass
    try:
        return parse_date(value, target_offset)
    except ValueError:
        raise RRuleError(f"Invalid UNTIL value: {value!r}") from None


@dataclass(frozen=True)
class RecurrenceRule:
    """
    A parsed RRULE.

    Attributes:
        frequency: How often the event repeats
        interval: Step size for DAILY and YEARLY rules
        until: Occurrences must start strictly before this time
        count: Total number of occurrences, including the first
        by_day: Weekday selector for WEEKLY and MONTHLY rules
        by_month_day: Fixed day of month for MONTHLY rules
    """

    frequency: Frequency
    interval: int = 1
    until: Optional[datetime] = None
    count: Optional[int] = None
    by_day: Optional[WeekdaySelector] = None
    by_month_day: Optional[int] = None

    @classmethod
    def parse(cls, text: str, target_offset: timezone) -> "RecurrenceRule":
        """
        Parse rule text such as `FREQ=WEEKLY;BYDAY=SA;UNTIL=20240119T135959Z`.

        Unknown keys are ignored. A bad value for a recognised key rejects the
        whole rule.

        Args:
            text: RRULE value (without the "RRULE:" prefix)
            target_offset: Offset that UNTIL is expressed in

        Returns:
            The parsed rule

        Raises:
            RRuleError: If FREQ is missing/unsupported or a value is malformed
        """
        frequency: Optional[Frequency] = None
        fields: dict = {}

        for part in text.strip().split(";"):
            if not part.strip():
                continue
            if "=" not in part:
                raise RRuleError(f"Malformed RRULE segment: {part!r}")
            key, value = part.split("=", 1)
            key = key.strip().upper()

            if key == "FREQ":
                try:
                    frequency = Frequency(value.strip().upper())
                except ValueError:
                    frequency = None
            elif key == "UNTIL":
                fields["until"] = _parse_until(value, target_offset)
            elif key == "BYDAY":
                fields["by_day"] = WeekdaySelector.parse(value)
            elif key == "BYMONTHDAY":
                day = _parse_int(key, value)
                if not 1 <= day <= 31:
                    raise RRuleError(f"BYMONTHDAY out of range: {day}")
                fields["by_month_day"] = day
            elif key == "INTERVAL":
                interval = _parse_int(key, value)
                if interval <= 0:
                    raise RRuleError(f"INTERVAL must be positive, got {interval}")
                fields["interval"] = interval
            elif key == "COUNT":
                count = _parse_int(key, value)
                if count < 0:
                    raise RRuleError(f"COUNT must be non-negative, got {count}")
                fields["count"] = count

        if frequency is None:
            raise RRuleError(f"Missing or unsupported FREQ in RRULE: {text!r}")
        return cls(frequency, **fields)


def parse_rrule(text: str, target_offset: timezone) -> Optional[RecurrenceRule]:
    """
    Parse a recurrence rule, logging instead of raising on failure.

    Returns:
        The parsed rule, or None if the event should not repeat
    """
    try:
        return RecurrenceRule.parse(text, target_offset)
    except RRuleError as e:
        logger.warning("Ignoring recurrence rule: %s", e)
        return None
