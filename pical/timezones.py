"""Timezone-aware resolution of iCal date and date-time values."""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

from .components import Property
from .constants import (
    DEFAULT_STANDARD_MONTHS,
    ICAL_DATE_FORMAT,
    ICAL_DATETIME_FORMAT,
)
from .properties import find_param

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{8}$")
_LOCAL_DATETIME_RE = re.compile(r"^\d{8}T\d{6}$")
_OFFSET_DATETIME_RE = re.compile(r"^(\d{8}T\d{6})(Z|[+-]\d{4})$")


class ZoneRule(ABC):
    """Maps a local wall-clock time in a named zone to a fixed UTC offset."""

    @abstractmethod
    def offset_for(self, local: datetime) -> timezone:
        pass


@dataclass(frozen=True)
class FixedZone(ZoneRule):
    offset: timezone

    def offset_for(self, local: datetime) -> timezone:
        return self.offset


@dataclass(frozen=True)
class SeasonalZone(ZoneRule):
    """
    A zone approximating daylight saving by calendar month.

    Months inside `standard_months` (inclusive) use the standard offset,
    all other months use the daylight offset. The default window, April to
    September, matches the south-eastern Australian convention.
    """

    standard: timezone
    daylight: timezone
    standard_months: tuple[int, int] = DEFAULT_STANDARD_MONTHS

    def offset_for(self, local: datetime) -> timezone:
        first, last = self.standard_months
        if first <= last:
            in_window = first <= local.month <= last
        else:
            # Window wraps over the new year, e.g. (11, 2)
            in_window = local.month >= first or local.month <= last
        return self.standard if in_window else self.daylight


def hours(value: int) -> timezone:
    return timezone(timedelta(hours=value))


DEFAULT_ZONES: dict[str, ZoneRule] = {
    "Australia/Brisbane": FixedZone(hours(10)),
    "Australia/Sydney": SeasonalZone(standard=hours(10), daylight=hours(11)),
}


def parse_date(value: str, offset: timezone) -> datetime:
    """
    Parse a bare `YYYYMMDD` date as midnight in the given offset.

    Raises:
        ValueError: If the value is not a valid date
    """
    if not _DATE_RE.match(value):
        raise ValueError(f"not a YYYYMMDD date: {value!r}")
    return datetime.strptime(value, ICAL_DATE_FORMAT).replace(tzinfo=offset)


def parse_local_datetime(value: str) -> datetime:
    """
    Parse a floating `YYYYMMDDTHHMMSS` date-time into a naive datetime.

    Raises:
        ValueError: If the value is not a valid local date-time
    """
    if not _LOCAL_DATETIME_RE.match(value):
        raise ValueError(f"not a YYYYMMDDTHHMMSS date-time: {value!r}")
    return datetime.strptime(value, ICAL_DATETIME_FORMAT)


def parse_offset_datetime(value: str) -> datetime:
    """
    Parse `YYYYMMDDTHHMMSSZ` or `YYYYMMDDTHHMMSS+HHMM` into an aware datetime.

    Raises:
        ValueError: If the value carries no explicit offset or is invalid
    """
    match = _OFFSET_DATETIME_RE.match(value)
    if not match:
        raise ValueError(f"not a date-time with UTC offset: {value!r}")
    local = datetime.strptime(match[1], ICAL_DATETIME_FORMAT)
    if match[2] == "Z":
        return local.replace(tzinfo=timezone.utc)
    sign = 1 if match[2][0] == "+" else -1
    delta = timedelta(hours=int(match[2][1:3]), minutes=int(match[2][3:5]))
    return local.replace(tzinfo=timezone(sign * delta))


class DateTimeResolver:
    """
    Resolves DTSTART/DTEND-style values into datetimes in a target offset.

    Attributes:
        target_offset: Offset every resolved datetime is expressed in
        zones: Mapping of TZID to the rule giving its offset
    """

    def __init__(
        self,
        target_offset: timezone,
        zones: Optional[Mapping[str, ZoneRule]] = None,
    ) -> None:
        self.target_offset: timezone = target_offset
        self.zones: Mapping[str, ZoneRule] = (
            DEFAULT_ZONES if zones is None else zones
        )

    def resolve(self, raw_value: str, zone_param: Optional[str]) -> datetime:
        """
        Resolve a raw value according to its zone or value-type parameter.

        Args:
            raw_value: Value text, e.g. "20240615T100000"
            zone_param: TZID, "DATE", or None for a value with its own offset

        Returns:
            Aware datetime converted to the target offset

        Raises:
            ValueError: If the value is malformed, the zone is unknown, or the
                converted datetime falls outside the representable range
        """
        value = raw_value.strip()
        if zone_param == "DATE":
            return parse_date(value, self.target_offset)

        if zone_param is None:
            return self._to_target(parse_offset_datetime(value), value)

        rule = self.zones.get(zone_param)
        if rule is None:
            logger.error("Unhandled TZID: %s", zone_param)
            raise ValueError(f"unknown timezone {zone_param!r}")

        local = parse_local_datetime(value)
        return self._to_target(local.replace(tzinfo=rule.offset_for(local)), value)

    def _to_target(self, moment: datetime, value: str) -> datetime:
        try:
            return moment.astimezone(self.target_offset)
        except OverflowError:
            # Shifting offsets can push year 1 or 9999 out of range
            raise ValueError(f"date out of range: {value!r}") from None

    def resolve_property(self, prop: Property) -> Optional[datetime]:
        """
        Resolve a date or date-time property using its TZID/VALUE parameters.

        Returns:
            Resolved datetime, or None if the property has no value

        Raises:
            ValueError: If the value cannot be resolved
        """
        if prop.value is None:
            return None
        zone = find_param(prop, "TZID") or find_param(prop, "VALUE")
        if zone == "DATE-TIME":
            zone = None
        return self.resolve(prop.value, zone)
